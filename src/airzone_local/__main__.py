"""Allow running as ``python -m airzone_local``."""

from .cli import main

main()
