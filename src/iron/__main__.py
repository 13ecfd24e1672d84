"""Allow `python -m iron`, same as the iron command."""

import sys

from .cli import main

sys.exit(main())
