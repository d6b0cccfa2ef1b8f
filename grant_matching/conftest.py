"""Root conftest - makes `grant_matching` importable without installation."""
import sys
from pathlib import Path

_here = Path(__file__).resolve().parent
_parent = _here.parent

# Add repo root so `grant_matching.X` works
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))
