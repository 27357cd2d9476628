"""Allow ``python -m twd_mcp``."""

import sys

from .cli import main

sys.exit(main())
