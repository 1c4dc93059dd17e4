"""BetaMNK console entry point."""

from betamnk.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
