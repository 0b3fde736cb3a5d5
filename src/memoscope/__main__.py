"""Allow running as: python -m memoscope"""

import sys

from memoscope.cli import main

sys.exit(main())
