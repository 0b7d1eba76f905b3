"""
File Service - blob documents and audit logs.

Uploads go to a blob container and leave a one-line audit file in the log
share. Deleting a log file leaves an audit file too. Audit writes are best
effort: a failure is logged and the primary operation still succeeds.

Exports:
    FileService
"""

from io import BytesIO
from typing import List, Optional

from config.defaults import StorageDefaults
from core.models import IncomingFile, LogFile, UploadedFile, utc_now
from exceptions import ValidationError
from infrastructure.interface_repository import IBlobRepository, IFileShareRepository
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "FileService")


def _parse_containers(value: str) -> List[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


class FileService:
    """Blob file management plus the log share viewer."""

    def __init__(
        self,
        blobs: IBlobRepository,
        file_share: IFileShareRepository,
        browsable_containers: Optional[List[str]] = None
    ):
        self.blobs = blobs
        self.file_share = file_share
        self.browsable_containers = browsable_containers or _parse_containers(
            StorageDefaults.BROWSABLE_CONTAINERS
        )

    def _check_container(self, container: str) -> str:
        if not container:
            raise ValidationError("Container name is required", "MISSING_PARAMETER")
        if container not in self.browsable_containers:
            raise ValidationError(
                f"Unknown container '{container}'. Valid: {', '.join(self.browsable_containers)}",
                "INVALID_PARAMETER"
            )
        return container

    async def _audit(self, prefix: str, content: str) -> None:
        file_name = f"{prefix}_{utc_now().strftime('%Y%m%d_%H%M%S')}.log"
        result = await self.file_share.upload_log(file_name, content)
        if not result.is_ok:
            logger.warning(f"⚠️ Audit log {file_name} not written: {result.message}")

    # ========================================================================
    # BLOBS
    # ========================================================================

    @log_exceptions(logger=logger)
    async def upload(
        self,
        file: IncomingFile,
        container: str,
        description: str = "",
        category: str = ""
    ) -> UploadedFile:
        self._check_container(container)
        uploaded = (await self.blobs.upload_file(
            file, container, description=description, category=category
        )).unwrap()
        await self._audit(
            "upload",
            f"File uploaded: {uploaded.file_name}, Size: {uploaded.file_size} bytes, Container: {container}"
        )
        return uploaded

    async def list_blob_files(self, container: str) -> List[UploadedFile]:
        self._check_container(container)
        result = await self.blobs.list_files(container)
        if not result.is_ok:
            logger.warning(f"⚠️ Listing {container} failed: {result.message}")
        return result.value_or([])

    async def download_blob(self, file_name: str, container: str) -> BytesIO:
        """Raises ResourceNotFoundError when the blob does not exist."""
        self._check_container(container)
        return (await self.blobs.download_file(file_name, container)).unwrap()

    async def delete_blob(self, file_name: str, container: str) -> bool:
        """True when a blob was deleted, False when absent or the call failed."""
        self._check_container(container)
        result = await self.blobs.delete_file(file_name, container)
        if not result.is_ok:
            logger.warning(f"⚠️ Deleting {container}/{file_name} failed: {result.message}")
        return bool(result.value_or(False))

    # ========================================================================
    # LOGS
    # ========================================================================

    async def list_logs(self) -> List[LogFile]:
        result = await self.file_share.list_logs()
        if not result.is_ok:
            logger.warning(f"⚠️ Listing logs failed: {result.message}")
        return result.value_or([])

    async def read_log(self, file_name: str) -> Optional[str]:
        return (await self.file_share.download_log(file_name)).value_or(None)

    async def delete_log(self, file_name: str) -> bool:
        result = await self.file_share.delete_log(file_name)
        deleted = bool(result.value_or(False))
        if deleted:
            await self._audit(
                "delete",
                f"File deleted: {file_name}, Time: {utc_now().strftime('%Y-%m-%d %H:%M:%S')}"
            )
        elif not result.is_ok:
            logger.warning(f"⚠️ Deleting log {file_name} failed: {result.message}")
        return deleted
