"""
Pytest configuration and shared fixtures.
"""

import pytest

from fastfea.transformers import LazyTransformer


@pytest.fixture
def names_dataset():
    """Four records covering every (firstname, lastname) pair."""
    return [
        {"firstname": "Mike", "lastname": "Jordan"},
        {"firstname": "Mike", "lastname": "James"},
        {"firstname": "Bill", "lastname": "Jordan"},
        {"firstname": "Bill", "lastname": "James"},
    ]


@pytest.fixture
def record():
    """Single record used by the lazy-composition tests."""
    return {"firstname": "Michael", "lastname": "Jordan"}


@pytest.fixture
def firstname():
    """Lazy extractor of the firstname field."""
    return LazyTransformer(lambda sample: sample["firstname"])


@pytest.fixture
def lastname():
    """Lazy extractor of the lastname field."""
    return LazyTransformer(lambda sample: sample["lastname"])
