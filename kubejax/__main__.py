"""Allow ``python -m kubejax``."""

import sys

from kubejax.cli import main

sys.exit(main())
