import sys
from pathlib import Path

# Flat layout: make the repository root importable for the dashboard modules
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
