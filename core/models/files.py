"""
File Models - Blob and File Share Boundaries.

UploadedFile and LogFile are never persisted on their own; they are rebuilt
on every listing from blob properties/metadata and share file properties.

Exports:
    IncomingFile: Upload payload received from a client
    UploadedFile: Blob listing row
    LogFile: Log file listing row
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .customer import utc_now


class IncomingFile(BaseModel):
    """Raw upload: name, bytes and declared content type."""

    file_name: str = Field(min_length=1)
    data: bytes = Field(default=b"", repr=False)
    content_type: str = Field(default="application/octet-stream")

    @property
    def size(self) -> int:
        return len(self.data)


class UploadedFile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str
    container_name: str
    blob_url: str = Field(default="")
    file_size: int = Field(default=0, ge=0)
    content_type: str = Field(default="")
    upload_date: datetime = Field(default_factory=utc_now)
    description: str = Field(default="")
    category: str = Field(default="")


class LogFile(BaseModel):
    """A log file in the root directory of the log share."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str
    share_name: str
    directory_path: str = Field(default="/")
    file_path: str = Field(default="")
    file_size: int = Field(default=0, ge=0)
    last_modified: Optional[datetime] = Field(default=None)
    content: str = Field(default="")

    def model_post_init(self, __context) -> None:
        if not self.file_path:
            self.file_path = f"/{self.file_name}"
