"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials. Repositories are built over the in-process
fakes in tests/fakes.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tests.fakes.azure_fakes import (  # noqa: E402
    FakeBlobServiceClient,
    FakeClock,
    FakeQueueServiceClient,
    FakeShareServiceClient,
    FakeTableServiceClient,
)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables so configuration resolves.

    The account name is never contacted: every test builds repositories
    over fakes.
    """
    defaults = {
        "STORAGE_ACCOUNT_NAME": "teststorage",
        "ENVIRONMENT": "dev",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test sees configuration re-read from its own environment."""
    from config import reset_config
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def table_service():
    return FakeTableServiceClient()


@pytest.fixture
def blob_service():
    return FakeBlobServiceClient()


@pytest.fixture
def queue_service(clock):
    return FakeQueueServiceClient(clock)


@pytest.fixture
def share_service():
    return FakeShareServiceClient()


@pytest.fixture
def table_repo(table_service):
    from infrastructure.table import TableRepository
    return TableRepository(table_service)


@pytest.fixture
def blob_repo(blob_service):
    from infrastructure.blob import BlobRepository
    return BlobRepository(blob_service)


@pytest.fixture
def queue_repo(queue_service):
    from infrastructure.queue import QueueRepository
    repo = QueueRepository(queue_service)
    # Queues exist up front; initialize() is covered on its own
    for name in (repo.orders_queue, repo.inventory_queue):
        queue_service.get_queue_client(name).created = True
    return repo


@pytest.fixture
def share_repo(share_service):
    from infrastructure.file_share import FileShareRepository
    return FileShareRepository(share_service)


@pytest.fixture
def catalog():
    from infrastructure.product_cache import InMemoryProductCatalog
    return InMemoryProductCatalog()
