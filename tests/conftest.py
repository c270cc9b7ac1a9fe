"""Shared fixtures."""
import pytest

from tests.support import FakePool, make_bundle


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def bundle():
    return make_bundle()
