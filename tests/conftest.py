import os
import sys

# Ensure src/ is on sys.path for imports like 'jigoor.*' without an install
SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if SRC not in sys.path:
    sys.path.insert(0, SRC)
