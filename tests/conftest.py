"""Pytest bootstrap for local source imports.

Puts the repository root on ``sys.path`` so ``import treelens`` resolves to
the working tree even when the package is not installed.
"""

from __future__ import annotations

import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)
