"""Shared fixtures: an in-memory store and repositories with predictable ids."""

import itertools

import pytest

from guideos.config import get_settings
from guideos.repositories import PaymentRepository, TripRepository
from guideos.services.storage import InMemoryBackend, RecordStore


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read the environment again."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def store(backend):
    return RecordStore(backend)


@pytest.fixture
def id_factory():
    """Zero-padded counter ids, so string order matches creation order."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):04d}"


@pytest.fixture
def trips(store, id_factory):
    return TripRepository(store, id_factory=id_factory)


@pytest.fixture
def payments(store, id_factory):
    return PaymentRepository(store, id_factory=id_factory)
