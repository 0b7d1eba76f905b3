"""
CatalogService tests: fallback browsing, image upload on create, updates
kept in step with the in-memory catalog.
"""

import pytest

from core.models import IncomingFile, Product
from exceptions import ConcurrencyConflictError, ResourceNotFoundError, StorageError, ValidationError
from services.catalog_service import CatalogService, SOURCE_MEMORY, SOURCE_TABLE
from tests.factories.model_factories import make_product
from tests.fakes.azure_fakes import http_error


@pytest.fixture
def service(table_repo, blob_repo, catalog):
    return CatalogService(table_repo, blob_repo, catalog)


class TestBrowse:

    async def test_empty_table_falls_back(self, service):
        listing = await service.browse()
        assert listing.source == SOURCE_MEMORY
        assert {p.product_id for p in listing.products} == {"sample-1", "sample-2", "sample-3"}

    async def test_table_products_preferred(self, service, table_repo):
        await table_repo.add_product(Product(**make_product(name="Stored")))
        listing = await service.browse()
        assert listing.source == SOURCE_TABLE
        assert [p.name for p in listing.products] == ["Stored"]

    async def test_failing_table_falls_back(self, service, table_service):
        table_service.fail_with(http_error(503))
        listing = await service.browse()
        assert listing.source == SOURCE_MEMORY
        assert len(listing.products) == 3

    async def test_category_fallback(self, service, table_repo):
        await table_repo.add_product(Product(**make_product(category="Garden")))
        listing = await service.browse(category="books")
        assert listing.source == SOURCE_MEMORY
        assert [p.product_id for p in listing.products] == ["sample-3"]

    async def test_category_from_table(self, service, table_repo):
        await table_repo.add_product(Product(**make_product(category="Garden")))
        listing = await service.browse(category="Garden")
        assert listing.source == SOURCE_TABLE
        assert listing.category == "Garden"

    async def test_categories_merged(self, service, table_repo):
        await table_repo.add_product(Product(**make_product(category="Garden")))
        assert await service.list_categories() == ["Books", "Clothing", "Electronics", "Garden"]


class TestGet:

    async def test_table_first(self, service, table_repo):
        created = (await table_repo.add_product(Product(**make_product()))).unwrap()
        assert (await service.get_product(created.product_id)).product_id == created.product_id

    async def test_catalog_second(self, service):
        assert (await service.get_product("sample-2")).name == "Sample Product 2"

    async def test_missing(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.get_product("nope")


class TestCreate:

    async def test_without_image(self, service, table_repo):
        created = await service.create_product(Product(**make_product()))
        assert created.image_url == ""
        assert (await table_repo.get_product(created.product_id)).is_ok

    async def test_with_image(self, service, blob_service):
        image = IncomingFile(file_name="lamp.png", data=b"\x89PNG", content_type="image/png")
        created = await service.create_product(Product(**make_product(category="Home")), image=image)

        container = blob_service.get_container_client("product-images")
        assert "lamp.png" in container.blobs
        assert container.blobs["lamp.png"].metadata["Category"] == "Home"
        assert created.image_url.endswith("/product-images/lamp.png")

    async def test_image_failure_aborts(self, service, blob_service, table_repo):
        blob_service.fail_with(http_error(403))
        image = IncomingFile(file_name="lamp.png", data=b"x")
        with pytest.raises(StorageError):
            await service.create_product(Product(**make_product()), image=image)
        assert (await table_repo.list_products()).unwrap() == []


class TestUpdateDelete:

    async def test_update_keeps_created_date(self, service, table_repo):
        created = (await table_repo.add_product(Product(**make_product()))).unwrap()
        replacement = Product(**make_product(name="Renamed"), etag=created.etag)

        updated = await service.update_product(created.product_id, replacement)

        assert updated.name == "Renamed"
        assert updated.created_date == created.created_date
        assert (await table_repo.get_product(created.product_id)).unwrap().name == "Renamed"

    async def test_update_id_mismatch(self, service):
        with pytest.raises(ValidationError):
            await service.update_product("sample-1", Product(product_id="other"))

    async def test_update_conflict(self, service, table_repo):
        created = (await table_repo.add_product(Product(**make_product()))).unwrap()
        await table_repo.update_product(created.model_copy(update={"name": "Other writer"}))
        with pytest.raises(ConcurrencyConflictError):
            await service.update_product(created.product_id, Product(**make_product(), etag=created.etag))

    async def test_update_catalog_only_product(self, service, catalog):
        updated = await service.update_product("sample-1", Product(**make_product(name="Refreshed")))
        assert updated.product_id == "sample-1"
        assert catalog.get_product("sample-1").name == "Refreshed"

    async def test_update_unknown(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.update_product("nope", Product(**make_product()))

    async def test_delete_table_product(self, service, table_repo):
        created = (await table_repo.add_product(Product(**make_product()))).unwrap()
        assert await service.delete_product(created.product_id) is True
        assert (await table_repo.get_product(created.product_id)).is_not_found

    async def test_delete_catalog_product(self, service, catalog):
        await service.delete_product("sample-3")
        assert catalog.get_product("sample-3") is None

    async def test_delete_unknown(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.delete_product("nope")
