from __future__ import annotations

import sys

from . import __version__
from .analysis_cli import main as analysis_main


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] == "--version":
        print(f"git-profile {__version__}")
        return 0
    return analysis_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
