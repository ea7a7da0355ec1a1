"""
Main entry point for liveconf.

Usage: python -m liveconf <command> [options]
"""

from liveconf.cli.commands import cli


def main():
    """Main entry point for the liveconf CLI."""
    cli()


if __name__ == "__main__":
    main()
