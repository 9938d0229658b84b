"""
Root-level pytest configuration for epdqplus.

Keeps the repository root importable so ``import epdqplus`` resolves to
the working tree when the package has not been installed.
"""

from __future__ import annotations

import sys
from pathlib import Path

root = Path(__file__).parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))
