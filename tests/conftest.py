"""Shared fixtures for all tests."""

import pytest

import storefront.catalog.store as store_module


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the in-memory product store before each test."""
    store_module._memory_store = None
    yield
    store_module._memory_store = None
