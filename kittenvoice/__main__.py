"""Module entrypoint for running kittenvoice as ``python -m kittenvoice``."""

from __future__ import annotations

from kittenvoice.cli import main


if __name__ == "__main__":
    main()
