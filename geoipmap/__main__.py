"""Allow ``python -m geoipmap``."""

import sys

from .cli import main

sys.exit(main())
