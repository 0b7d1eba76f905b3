"""
BlobRepository tests over the in-process blob fake.
"""

from core.errors import ErrorCode
from core.models import IncomingFile
from tests.factories.model_factories import make_file_bytes
from tests.fakes.azure_fakes import http_error


def _incoming(name: str = "invoice.pdf", data: bytes = None, content_type: str = "application/pdf") -> IncomingFile:
    return IncomingFile(file_name=name, data=data if data is not None else make_file_bytes(), content_type=content_type)


class TestUpload:

    async def test_creates_container_with_blob_access(self, blob_repo, blob_service):
        await blob_repo.upload_file(_incoming(), "documents")
        container = blob_service.get_container_client("documents")
        assert container.created
        assert container.public_access == "blob"

    async def test_upload_sets_metadata(self, blob_repo, blob_service):
        payload = make_file_bytes(128)
        uploaded = (await blob_repo.upload_file(
            _incoming(data=payload), "documents", description="Q3", category="Finance"
        )).unwrap()

        assert uploaded.file_size == 128
        assert uploaded.blob_url.endswith("/documents/invoice.pdf")
        blob = blob_service.get_container_client("documents").blobs["invoice.pdf"]
        assert blob.metadata["Description"] == "Q3"
        assert blob.metadata["Category"] == "Finance"
        assert blob.metadata["OriginalFileName"] == "invoice.pdf"
        assert "UploadDate" in blob.metadata
        assert blob.content_settings.content_type == "application/pdf"

    async def test_upload_overwrites(self, blob_repo):
        await blob_repo.upload_file(_incoming(data=b"one"), "documents")
        uploaded = (await blob_repo.upload_file(_incoming(data=b"second"), "documents")).unwrap()
        assert uploaded.file_size == 6

    async def test_existing_container_is_fine(self, blob_repo, blob_service):
        blob_service.get_container_client("documents").created = True
        assert (await blob_repo.upload_file(_incoming(), "documents")).is_ok

    async def test_transient_failure(self, blob_repo, blob_service):
        blob_service.fail_with(http_error(500))
        result = await blob_repo.upload_file(_incoming(), "documents")
        assert result.is_transient
        assert result.error_code == ErrorCode.STORAGE_ERROR


class TestListing:

    async def test_uploaded_file_is_listed(self, blob_repo):
        await blob_repo.upload_file(_incoming(data=make_file_bytes(10)), "documents", category="Finance")
        files = (await blob_repo.list_files("documents")).unwrap()
        assert len(files) == 1
        listed = files[0]
        assert listed.file_name == "invoice.pdf"
        assert listed.container_name == "documents"
        assert listed.file_size == 10
        assert listed.category == "Finance"
        assert listed.content_type == "application/pdf"

    async def test_missing_container_lists_empty(self, blob_repo):
        result = await blob_repo.list_files("never-created")
        assert result.is_ok
        assert result.value == []


class TestDownloadDelete:

    async def test_download(self, blob_repo):
        payload = make_file_bytes(64)
        await blob_repo.upload_file(_incoming(data=payload), "uploads")
        stream = (await blob_repo.download_file("invoice.pdf", "uploads")).unwrap()
        assert stream.tell() == 0
        assert stream.read() == payload

    async def test_download_missing(self, blob_repo):
        await blob_repo.upload_file(_incoming(), "uploads")
        assert (await blob_repo.download_file("missing.bin", "uploads")).is_not_found

    async def test_delete_if_exists(self, blob_repo):
        await blob_repo.upload_file(_incoming(), "uploads")
        assert (await blob_repo.delete_file("invoice.pdf", "uploads")).value is True
        assert (await blob_repo.delete_file("invoice.pdf", "uploads")).value is False

    async def test_file_url_without_network(self, blob_repo, blob_service):
        url = blob_repo.get_file_url("a.png", "product-images")
        assert url == f"{blob_service.account_url}/product-images/a.png"
        assert blob_service.state.calls == 0


class TestContainers:

    async def test_exists_and_create(self, blob_repo):
        assert (await blob_repo.container_exists("documents")).value is False
        assert (await blob_repo.create_container("documents")).value is True
        assert (await blob_repo.create_container("documents")).value is False
        assert (await blob_repo.container_exists("documents")).value is True
