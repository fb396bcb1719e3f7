"""Module entrypoint for ``python -m mdtree``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and run setup happen in ``mdtree.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
