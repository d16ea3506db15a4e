"""Allow running as python -m mathruntime."""

import sys

from .cli import main

sys.exit(main())
