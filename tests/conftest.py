"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from fakes import FakeTransport, make_payload, respond_with
from loguru import logger

from animeflix.models import Mode, PageResult
from animeflix.reconciler import reconcile
from animeflix.store import Store


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop sinks added during a test (CLI runs point them at captured streams)."""
    yield
    logger.remove()


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def transport() -> FakeTransport:
    """A transport whose calls wait until the test resolves them."""
    return FakeTransport()


@pytest.fixture
def auto_transport() -> FakeTransport:
    """A transport that answers every call with ten items straight away."""
    return FakeTransport(respond=respond_with(make_payload(10)))


@pytest.fixture
def top_result() -> PageResult:
    """Top listing with 25 items spread over 3 pages."""
    return reconcile(Mode.BROWSE, make_payload(25, last_page=3, has_next=True))
