"""Allow ``python -m textui``."""

from textui.cli import main

main()
