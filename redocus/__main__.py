"""Allow ``python -m redocus``."""

from .cli import main

main()
