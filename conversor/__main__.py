"""Permite executar ``python -m conversor``."""
import sys

from .cli import main

sys.exit(main())
