"""Entry point for `python -m biomeforge`."""

from .cli import main

main()
