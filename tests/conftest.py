"""
Shared pytest fixtures for the term parser tests.

This module provides:
- A parser with a seeded random source
- Isolation from MATHRUNTIME_* environment variables and logging setup
"""

import logging
import random

import pytest

from mathruntime.core.config import get_settings
from mathruntime.parser import Parser


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Ignore settings from the environment and reset the settings cache."""
    for name in (
        "SPLIT_IDENTIFIERS",
        "RANDOM_SEED",
        "CONTEXT_FILE",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"MATHRUNTIME_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # Handlers installed by setup_logging() point at captured streams.
    package_logger = logging.getLogger("mathruntime")
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible alternatives."""
    return random.Random(42)


@pytest.fixture
def parser(rng) -> Parser:
    """Parser with the default context and a seeded random source."""
    return Parser(rng=rng)

