"""Fixtures for use case tests."""

from contextlib import nullcontext
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_inventory_store():
    store = AsyncMock()
    store.lock = MagicMock(return_value=nullcontext())
    store.save_record.side_effect = lambda record: record
    return store


@pytest.fixture
def mock_material_request_store():
    store = AsyncMock()
    store.lock = MagicMock(return_value=nullcontext())
    store.save_request.side_effect = lambda request: request
    return store
