"""
CustomerService and FileService tests.
"""

import pytest

from core.models import Customer, IncomingFile
from exceptions import ConcurrencyConflictError, ResourceNotFoundError, StorageError, ValidationError
from services.customer_service import CustomerService
from services.file_service import FileService
from tests.factories.model_factories import make_customer, make_file_bytes
from tests.fakes.azure_fakes import http_error


@pytest.fixture
def customers(table_repo):
    return CustomerService(table_repo)


@pytest.fixture
def files(blob_repo, share_repo):
    return FileService(blob_repo, share_repo)


class TestCustomerService:

    async def test_create_and_get(self, customers):
        created = await customers.create_customer(Customer(**make_customer()))
        assert (await customers.get_customer(created.customer_id)).email == created.email

    async def test_list_degrades(self, customers, table_service):
        table_service.fail_with(http_error(503))
        assert await customers.list_customers() == []

    async def test_get_missing(self, customers):
        with pytest.raises(ResourceNotFoundError):
            await customers.get_customer("ghost")

    async def test_update_keeps_created_date(self, customers):
        created = await customers.create_customer(Customer(**make_customer()))
        updated = await customers.update_customer(
            created.customer_id, Customer(**make_customer(city="Paarl"), etag=created.etag)
        )
        assert updated.city == "Paarl"
        assert updated.created_date == created.created_date

    async def test_update_id_mismatch(self, customers):
        created = await customers.create_customer(Customer(**make_customer()))
        with pytest.raises(ValidationError):
            await customers.update_customer(created.customer_id, Customer(customer_id="someone-else"))

    async def test_update_stale_etag(self, customers):
        created = await customers.create_customer(Customer(**make_customer()))
        await customers.update_customer(created.customer_id, Customer(**make_customer(), etag=created.etag))
        with pytest.raises(ConcurrencyConflictError):
            await customers.update_customer(created.customer_id, Customer(**make_customer(), etag=created.etag))

    async def test_update_stale_etag_forced(self, customers):
        created = await customers.create_customer(Customer(**make_customer()))
        await customers.update_customer(created.customer_id, Customer(**make_customer(), etag=created.etag))
        forced = await customers.update_customer(
            created.customer_id, Customer(**make_customer(city="Forced"), etag=created.etag), force=True
        )
        assert forced.city == "Forced"

    async def test_delete(self, customers):
        created = await customers.create_customer(Customer(**make_customer()))
        assert await customers.delete_customer(created.customer_id) is True
        with pytest.raises(ResourceNotFoundError):
            await customers.delete_customer(created.customer_id)


class TestFileService:

    async def test_upload_writes_audit_log(self, files, share_service):
        uploaded = await files.upload(
            IncomingFile(file_name="invoice.pdf", data=make_file_bytes(42)), "documents"
        )
        assert uploaded.file_size == 42

        share = share_service.get_share_client("logs")
        names = list(share.files)
        assert len(names) == 1
        assert names[0].startswith("upload_") and names[0].endswith(".log")
        assert share.files[names[0]].data.decode() == (
            "File uploaded: invoice.pdf, Size: 42 bytes, Container: documents"
        )

    async def test_uploaded_file_listed(self, files):
        await files.upload(IncomingFile(file_name="invoice.pdf", data=b"%PDF"), "documents", category="Finance")
        listed = await files.list_blob_files("documents")
        assert [f.file_name for f in listed] == ["invoice.pdf"]
        assert listed[0].category == "Finance"

    async def test_audit_failure_does_not_fail_upload(self, files, share_service):
        share_service.fail_with(http_error(500))
        uploaded = await files.upload(IncomingFile(file_name="a.txt", data=b"a"), "uploads")
        assert uploaded.file_name == "a.txt"

    async def test_upload_failure_raises(self, files, blob_service):
        blob_service.fail_with(http_error(503))
        with pytest.raises(StorageError):
            await files.upload(IncomingFile(file_name="a.txt", data=b"a"), "uploads")

    async def test_unknown_container(self, files):
        with pytest.raises(ValidationError):
            await files.list_blob_files("secrets")

    async def test_download(self, files):
        await files.upload(IncomingFile(file_name="a.txt", data=b"abc"), "uploads")
        assert (await files.download_blob("a.txt", "uploads")).read() == b"abc"

    async def test_download_missing(self, files):
        await files.upload(IncomingFile(file_name="a.txt", data=b"abc"), "uploads")
        with pytest.raises(ResourceNotFoundError):
            await files.download_blob("b.txt", "uploads")

    async def test_delete_blob(self, files):
        await files.upload(IncomingFile(file_name="a.txt", data=b"abc"), "uploads")
        assert await files.delete_blob("a.txt", "uploads") is True
        assert await files.delete_blob("a.txt", "uploads") is False

    async def test_read_log(self, files, share_repo):
        await share_repo.upload_log("manual.log", "hello")
        assert await files.read_log("manual.log") == "hello"
        assert await files.read_log("absent.log") is None

    async def test_list_logs_degrades(self, files, share_service):
        share_service.fail_with(http_error(503))
        assert await files.list_logs() == []

    async def test_delete_log_writes_audit(self, files, share_repo, share_service):
        await share_repo.upload_log("old.log", "x")
        assert await files.delete_log("old.log") is True

        share = share_service.get_share_client("logs")
        assert "old.log" not in share.files
        audit = [name for name in share.files if name.startswith("delete_")]
        assert len(audit) == 1
        assert share.files[audit[0]].data.decode().startswith("File deleted: old.log, Time: ")

    async def test_delete_missing_log(self, files, share_service):
        assert await files.delete_log("absent.log") is False
        assert share_service.get_share_client("logs").files == {}
