"""Entry point for python -m pokerboard"""

from pokerboard.cli import cli

if __name__ == "__main__":
    cli()
