"""Entry point for ``python -m dson_core``."""

from .cli import main

main()
