"""Allow running the CLI as ``python -m geoselect``."""

from geoselect.cli import cli

if __name__ == "__main__":
    cli()
