"""
Pytest bootstrap for the MealHub test suite.

Puts the repository root on sys.path so the flat packages (adapters, api,
app, domain, repositories, services) and main.py import without installing.
Fixtures live in test_fixtures.py and are imported by each test module.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
