"""Allow ``python -m isochart``."""

import sys

from .cli import main

sys.exit(main())
