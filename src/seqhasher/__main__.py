"""Allow ``python -m seqhasher``."""

from seqhasher.cli.main import cli

if __name__ == "__main__":
    cli()
