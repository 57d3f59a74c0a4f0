"""
Pytest configuration and fixtures for shelfdb tests.

This module provides shared fixtures used across unit and integration tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from shelfdb.store import MemoryMedium, ShelfDB


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db() -> ShelfDB:
    """Create an empty in-memory store."""
    return ShelfDB()


@pytest.fixture
def memory_medium() -> MemoryMedium:
    """Create an empty in-memory byte medium."""
    return MemoryMedium()


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a simple store config YAML for testing."""
    return """
path: ./data/store.json
strict: true
log_level: info
"""
