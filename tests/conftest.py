import os
import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Keep test output quiet regardless of a developer's .env
os.environ.setdefault("MERKLE_LOG_LEVEL", "WARNING")

FRUIT = [b"apple", b"banana", b"cherry", b"date", b"elderberry"]


@pytest.fixture
def fruit():
    return list(FRUIT)


@pytest.fixture
def fruit_tree(fruit):
    from merkle_core.merkle import build

    return build(fruit)
