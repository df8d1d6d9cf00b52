"""
Test configuration for Tax Advisor tests.

sys.path is configured so 'from tax_advisor...' resolves when pytest is run
from the repository root without an editable install.
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent.parent   # .../package/

if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))
