"""Pytest configuration for path setup.

Modules are imported as ``src.market_maker...``.  When pytest is executed as
an installed script, the repository root is not automatically added to
``sys.path``; this file makes sure it is.
"""

from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)
