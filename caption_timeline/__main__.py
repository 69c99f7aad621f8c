"""Package entry point for ``python -m caption_timeline``.

RULES:
- This file must exist for ``python -m caption_timeline`` to work
- All arguments are handled by the CLI's main()
"""

from caption_timeline.cli import main

if __name__ == "__main__":
    main()
