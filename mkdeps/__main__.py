# SPDX-License-Identifier: MIT
"""Allow running as ``python -m mkdeps``."""

import sys

from mkdeps.cli import main

sys.exit(main())
