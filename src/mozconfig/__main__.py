"""Allow running the CLI with `python -m mozconfig`."""

from mozconfig.cli import app

if __name__ == "__main__":
    app()
