from __future__ import annotations

from pathlib import Path
import sys

import pytest

# Ensure project root is on sys.path for absolute imports
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from unitcompare import RowStore


@pytest.fixture
def store() -> RowStore:
    return RowStore()


@pytest.fixture
def filled_store(store: RowStore) -> RowStore:
    store.load(
        [
            {"name": "Small", "quantity": "2", "price": "10"},
            {"name": "Large", "quantity": "5", "price": "20"},
        ]
    )
    return store
