"""Root conftest.py: puts ``src`` on the path so tests run from a checkout."""

import sys
from pathlib import Path

_SRC_PATH = str(Path(__file__).parent / "src")
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)
