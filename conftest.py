"""
Make the package under src/ importable when the tests run from a checkout.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.absolute() / "src"))
