"""
Test configuration and fixtures for the link analytics service.
Every test gets its own storage directory, so tests never share links.
"""

import pytest
from fastapi.testclient import TestClient
from main import app
from linkanalytics_app.cache.strategies import InMemoryCache, NullCache
from linkanalytics_app.dependencies import get_link_service
from linkanalytics_app.identifiers.strategies import Sha256IdentifierStrategy
from linkanalytics_app.services.link_service import LinkService
from linkanalytics_app.storage.hit_log import HitLog
from linkanalytics_app.storage.record_store import FileRecordStore


@pytest.fixture(scope="function")
def storage_dir(tmp_path):
    return tmp_path / "links"


@pytest.fixture(scope="function")
def record_store(storage_dir):
    """Fresh record store in a temporary directory"""
    return FileRecordStore(base_dir=storage_dir, identifiers=Sha256IdentifierStrategy())


@pytest.fixture(scope="function")
def hit_log(record_store):
    return HitLog(record_store)


@pytest.fixture(scope="function")
def link_service(record_store, hit_log):
    """Service without cache: every lookup goes to disk"""
    return LinkService(records=record_store, hits=hit_log, cache=NullCache())


@pytest.fixture(scope="function")
def cached_link_service(record_store, hit_log):
    return LinkService(records=record_store, hits=hit_log, cache=InMemoryCache())


@pytest.fixture(scope="function")
def client(link_service):
    """
    Create a test client with the link service overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_link_service] = lambda: link_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
