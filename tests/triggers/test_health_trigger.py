"""
Health endpoint tests over fake-backed repositories registered in the
RepositoryFactory cache.
"""

import json

import azure.functions as func
import pytest

from infrastructure.factory import RepositoryFactory
from tests.fakes.azure_fakes import http_error
from triggers.health import health_check_trigger


@pytest.fixture(autouse=True)
def cached_repositories(monkeypatch, table_repo, blob_repo, queue_repo, share_repo, catalog):
    monkeypatch.setattr(RepositoryFactory, "_repositories", {
        "table": table_repo,
        "blob": blob_repo,
        "queue": queue_repo,
        "file_share": share_repo,
        "catalog": catalog,
    })


async def check():
    response = await health_check_trigger.handle_request(
        func.HttpRequest(method="GET", url="/api/health", body=b"")
    )
    assert response.status_code == 200
    return json.loads(response.get_body())


async def test_missing_container_and_share_are_degraded():
    health = await check()
    assert health["status"] == "healthy"
    assert health["components"]["tables"]["status"] == "healthy"
    assert health["components"]["blobs"]["status"] == "degraded"
    assert health["components"]["file_share"]["status"] == "degraded"
    assert health["components"]["product_catalog"]["details"]["products"] == 3
    assert health["environment"]["storage_account"] == "teststorage"


async def test_failing_queue_is_unhealthy(queue_service):
    queue_service.fail_with(http_error(500))
    health = await check()
    assert health["status"] == "unhealthy"
    assert health["components"]["queues"]["status"] == "unhealthy"
    assert health["components"]["tables"]["status"] == "healthy"
