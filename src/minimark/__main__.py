"""Allow ``python -m minimark``."""

import sys

from minimark.cli import main

sys.exit(main())
