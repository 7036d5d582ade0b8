"""Allow ``python -m lifeos``."""

import sys

from lifeos.cli import main

sys.exit(main())
