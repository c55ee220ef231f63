"""
Pytest configuration for Bisaya++ tests.
"""
from pathlib import Path
import sys

import pytest


# Ensure the project root is on the Python path for all tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

EXAMPLES = PROJECT_ROOT / 'examples'


@pytest.fixture
def example_source():
    def load(name: str) -> str:
        return (EXAMPLES / name).read_text(encoding='utf-8')
    return load
