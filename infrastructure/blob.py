# ============================================================================
# MODULE CONTEXT - BLOB REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage repository
# PURPOSE: Upload, list, download and delete files in blob containers
# EXPORTS: BlobRepository
# INTERFACES: IBlobRepository for dependency injection
# PYDANTIC_MODELS: IncomingFile, UploadedFile
# DEPENDENCIES: azure-storage-blob (aio), azure-core, io.BytesIO, core.models
# SOURCE: Blob containers product-images / documents / uploads
# SCOPE: ALL blob operations
# VALIDATION: Container existence, blob existence
# PATTERNS: Repository, container client cache, StorageResult error boundary
# ENTRY_POINTS: RepositoryFactory.create_blob_repository()
# ============================================================================

"""
Blob Storage Repository

Containers are created on first upload with blob-level anonymous read, so
product image URLs can be embedded directly in pages. Uploads overwrite a
blob with the same name and attach metadata:

    Description       free text from the upload form
    Category          free text from the upload form
    UploadDate        ISO-8601 UTC timestamp of the upload
    OriginalFileName  name the client sent

Listings rebuild UploadedFile rows from blob properties plus that metadata.

Usage:
    blob_repo = await RepositoryFactory.create_blob_repository()
    uploaded = (await blob_repo.upload_file(incoming, "documents")).unwrap()
"""

# ============================================================================
# IMPORTS - Top of file for fail-fast behavior
# ============================================================================

from datetime import datetime
from io import BytesIO
from typing import Dict, List, Optional, Set

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from config.defaults import StorageDefaults
from core.models import IncomingFile, UploadedFile, StorageResult, utc_now
from exceptions import ContractViolationError
from infrastructure.decorators import storage_operation
from infrastructure.interface_repository import IBlobRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BlobRepository")


def _parse_upload_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class BlobRepository(IBlobRepository):
    """
    Azure Blob Storage repository.

    Container clients are cached per name. Containers confirmed to exist are
    remembered so repeated uploads skip the create call.
    """

    def __init__(
        self,
        service_client: BlobServiceClient,
        public_access: Optional[str] = StorageDefaults.CONTAINER_PUBLIC_ACCESS
    ):
        self.logger = logger
        self._service = service_client
        self.public_access = public_access
        self._container_clients: Dict[str, ContainerClient] = {}
        self._ready_containers: Set[str] = set()

    def _get_container_client(self, container_name: str) -> ContainerClient:
        if container_name not in self._container_clients:
            logger.debug(f"📦 Creating container client for: {container_name}")
            self._container_clients[container_name] = self._service.get_container_client(container_name)
        return self._container_clients[container_name]

    async def _ensure_container(self, container_name: str) -> bool:
        """Create the container if needed. Returns True when it was created."""
        if container_name in self._ready_containers:
            return False
        container = self._get_container_client(container_name)
        created = False
        try:
            await container.create_container(public_access=self.public_access)
            logger.info(f"✅ Created container: {container_name}")
            created = True
        except ResourceExistsError:
            logger.debug(f"Container already exists: {container_name}")
        self._ready_containers.add(container_name)
        return created

    # ========================================================================
    # FILE OPERATIONS
    # ========================================================================

    @storage_operation("upload_file")
    async def upload_file(
        self,
        file: IncomingFile,
        container_name: str,
        description: str = "",
        category: str = ""
    ) -> StorageResult[UploadedFile]:
        if not isinstance(file, IncomingFile):
            raise ContractViolationError(
                f"upload_file expects IncomingFile, got {type(file).__name__}"
            )
        await self._ensure_container(container_name)

        blob_client = self._get_container_client(container_name).get_blob_client(file.file_name)
        upload_date = utc_now()
        metadata = {
            "Description": description or "",
            "Category": category or "",
            "UploadDate": upload_date.isoformat(),
            "OriginalFileName": file.file_name,
        }

        logger.info(f"📤 Uploading {file.file_name} ({file.size} bytes) to {container_name}")
        await blob_client.upload_blob(
            file.data,
            overwrite=True,
            metadata=metadata,
            content_settings=ContentSettings(content_type=file.content_type)
        )
        properties = await blob_client.get_blob_properties()

        return StorageResult.ok(UploadedFile(
            file_name=file.file_name,
            container_name=container_name,
            blob_url=blob_client.url,
            file_size=properties.size,
            content_type=file.content_type,
            upload_date=upload_date,
            description=description or "",
            category=category or "",
        ))

    @storage_operation("download_file")
    async def download_file(self, file_name: str, container_name: str) -> StorageResult[BytesIO]:
        blob_client = self._get_container_client(container_name).get_blob_client(file_name)
        downloader = await blob_client.download_blob()
        data = await downloader.readall()
        logger.info(f"📥 Downloaded {container_name}/{file_name} ({len(data)} bytes)")
        return StorageResult.ok(BytesIO(data))

    @storage_operation("list_files")
    async def list_files(self, container_name: str) -> StorageResult[List[UploadedFile]]:
        container = self._get_container_client(container_name)
        if not await container.exists():
            logger.debug(f"Container {container_name} does not exist, nothing to list")
            return StorageResult.ok([])

        files = []
        async for blob in container.list_blobs(include=["metadata"]):
            metadata = blob.metadata or {}
            content_settings = blob.content_settings
            upload_date = blob.last_modified or _parse_upload_date(metadata.get("UploadDate"))
            files.append(UploadedFile(
                file_name=blob.name,
                container_name=container_name,
                blob_url=container.get_blob_client(blob.name).url,
                file_size=blob.size or 0,
                content_type=(content_settings.content_type if content_settings else None) or "",
                upload_date=upload_date or utc_now(),
                description=metadata.get("Description", ""),
                category=metadata.get("Category", ""),
            ))
        logger.debug(f"📋 Listed {len(files)} blobs in {container_name}")
        return StorageResult.ok(files)

    @storage_operation("delete_file")
    async def delete_file(self, file_name: str, container_name: str) -> StorageResult[bool]:
        blob_client = self._get_container_client(container_name).get_blob_client(file_name)
        try:
            await blob_client.delete_blob()
        except ResourceNotFoundError:
            logger.debug(f"Blob {container_name}/{file_name} did not exist")
            return StorageResult.ok(False)
        logger.info(f"🗑️ Deleted blob {container_name}/{file_name}")
        return StorageResult.ok(True)

    def get_file_url(self, file_name: str, container_name: str) -> str:
        """Public URL of a blob. No network call."""
        return self._get_container_client(container_name).get_blob_client(file_name).url

    # ========================================================================
    # CONTAINER OPERATIONS
    # ========================================================================

    @storage_operation("container_exists")
    async def container_exists(self, container_name: str) -> StorageResult[bool]:
        exists = await self._get_container_client(container_name).exists()
        if exists:
            self._ready_containers.add(container_name)
        return StorageResult.ok(exists)

    @storage_operation("create_container")
    async def create_container(self, container_name: str) -> StorageResult[bool]:
        self._ready_containers.discard(container_name)
        return StorageResult.ok(await self._ensure_container(container_name))
