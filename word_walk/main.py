"""Module entrypoint for launching the terminal app."""
from __future__ import annotations

import sys

import app


def main() -> None:
    sys.exit(app.launch())


if __name__ == "__main__":
    main()
