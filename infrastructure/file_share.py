# ============================================================================
# MODULE CONTEXT - FILE SHARE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Files repository
# PURPOSE: Write, read, list and delete UTF-8 audit log files in one share
# EXPORTS: FileShareRepository
# INTERFACES: IFileShareRepository
# PYDANTIC_MODELS: LogFile
# DEPENDENCIES: azure-storage-file-share (aio), azure-core, core.models
# SOURCE: File share "logs", root directory only
# SCOPE: ALL file share operations
# PATTERNS: Repository, create-on-first-write, StorageResult error boundary
# ENTRY_POINTS: RepositoryFactory.create_file_share_repository()
# ============================================================================

"""
Azure Files Repository - audit log share.

Log files are small UTF-8 text files written to the root directory of one
share (default "logs"). The share is created on first write.

Exports:
    FileShareRepository: IFileShareRepository implementation

Dependencies:
    azure-storage-file-share (aio), azure-core
"""

from typing import List, Optional

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.fileshare.aio import ShareClient, ShareServiceClient

from config.defaults import StorageDefaults
from core.models import LogFile, StorageResult
from infrastructure.decorators import storage_operation
from infrastructure.interface_repository import IFileShareRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "FileShareRepository")


class FileShareRepository(IFileShareRepository):
    """Read and write log files in an Azure Files share."""

    def __init__(self, service_client: ShareServiceClient, default_share: str = StorageDefaults.LOG_SHARE):
        self.logger = logger
        self._service = service_client
        self.default_share = default_share

    def _share(self, share_name: Optional[str]) -> ShareClient:
        return self._service.get_share_client(share_name or self.default_share)

    async def _share_exists(self, share: ShareClient) -> bool:
        try:
            await share.get_share_properties()
            return True
        except ResourceNotFoundError:
            return False

    async def _ensure_share(self, share: ShareClient) -> bool:
        try:
            await share.create_share()
            logger.info(f"✅ Created file share: {share.share_name}")
            return True
        except ResourceExistsError:
            return False

    @storage_operation("upload_log")
    async def upload_log(self, file_name: str, content: str, share_name: Optional[str] = None) -> StorageResult[bool]:
        share = self._share(share_name)
        await self._ensure_share(share)
        data = content.encode("utf-8")
        await share.get_file_client(file_name).upload_file(data)
        logger.info(f"📝 Wrote log {share.share_name}/{file_name} ({len(data)} bytes)")
        return StorageResult.ok(True)

    @storage_operation("download_log")
    async def download_log(self, file_name: str, share_name: Optional[str] = None) -> StorageResult[str]:
        downloader = await self._share(share_name).get_file_client(file_name).download_file()
        data = await downloader.readall()
        return StorageResult.ok(data.decode("utf-8", errors="replace"))

    @storage_operation("list_logs")
    async def list_logs(self, share_name: Optional[str] = None) -> StorageResult[List[LogFile]]:
        share = self._share(share_name)
        if not await self._share_exists(share):
            logger.debug(f"Share {share.share_name} does not exist, nothing to list")
            return StorageResult.ok([])

        logs = []
        directory = share.get_directory_client("")
        async for item in directory.list_directories_and_files():
            if item.get("is_directory"):
                continue
            file_client = share.get_file_client(item["name"])
            properties = await file_client.get_file_properties()
            downloader = await file_client.download_file()
            content = (await downloader.readall()).decode("utf-8", errors="replace")
            logs.append(LogFile(
                file_name=item["name"],
                share_name=share.share_name,
                file_size=properties.size or 0,
                last_modified=properties.last_modified,
                content=content,
            ))
        logger.debug(f"📋 Listed {len(logs)} log files in {share.share_name}")
        return StorageResult.ok(logs)

    @storage_operation("delete_log")
    async def delete_log(self, file_name: str, share_name: Optional[str] = None) -> StorageResult[bool]:
        share = self._share(share_name)
        try:
            await share.get_file_client(file_name).delete_file()
        except ResourceNotFoundError:
            return StorageResult.ok(False)
        logger.info(f"🗑️ Deleted log {share.share_name}/{file_name}")
        return StorageResult.ok(True)

    @storage_operation("share_exists")
    async def share_exists(self, share_name: Optional[str] = None) -> StorageResult[bool]:
        return StorageResult.ok(await self._share_exists(self._share(share_name)))

    @storage_operation("create_share")
    async def create_share(self, share_name: Optional[str] = None) -> StorageResult[bool]:
        return StorageResult.ok(await self._ensure_share(self._share(share_name)))
