"""
File HTTP Triggers - blob documents and log share.

Endpoints:
    GET    /api/files/blobs?container=                  list blobs (default product-images)
    POST   /api/files/blobs                             multipart upload (file, containerName,
                                                        fileName, description, category)
    GET    /api/files/blobs/{container}/{file_name}     download blob
    DELETE /api/files/blobs/{container}/{file_name}     delete blob
    GET    /api/files/logs                              list log files with content
    GET    /api/files/logs/{file_name}                  view one log
    GET    /api/files/logs/{file_name}/download         download one log as text/plain
    DELETE /api/files/logs/{file_name}                  delete one log (writes a delete audit log)

Exports:
    blob_files_trigger, blob_item_trigger, log_files_trigger, log_item_trigger, log_download_trigger
"""

import mimetypes
from typing import Any, Dict, List, Union

import azure.functions as func

from config.defaults import StorageDefaults
from exceptions import ResourceNotFoundError, ValidationError
from services import get_retail_services
from .http_base import BaseHttpTrigger, to_json
from .multipart import parse_multipart


def _attachment(data: bytes, file_name: str, mimetype: str) -> func.HttpResponse:
    return func.HttpResponse(
        body=data,
        status_code=200,
        mimetype=mimetype,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'}
    )


class BlobFilesTrigger(BaseHttpTrigger):
    """List and upload blobs."""

    def __init__(self):
        super().__init__("blob_files")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "POST"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        services = await get_retail_services()

        if req.method == "GET":
            container = req.params.get("container") or StorageDefaults.PRODUCT_IMAGES_CONTAINER
            files = await services.files.list_blob_files(container)
            return {
                "container": container,
                "containers": services.files.browsable_containers,
                "files": [to_json(f) for f in files],
                "count": len(files),
            }

        incoming, fields = parse_multipart(req)
        if incoming is None:
            raise ValidationError("No file provided. Include a 'file' part in the form", "MISSING_PARAMETER")
        container = (fields.get("containerName") or fields.get("container") or "").strip()
        file_name = (fields.get("fileName") or "").strip()
        if file_name:
            incoming = incoming.model_copy(update={"file_name": file_name})

        uploaded = await services.files.upload(
            incoming,
            container,
            description=fields.get("description", ""),
            category=fields.get("category", "")
        )
        return {"file": to_json(uploaded), "uploaded": True}


class BlobItemTrigger(BaseHttpTrigger):
    """Download or delete one blob."""

    def __init__(self):
        super().__init__("blob_item")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "DELETE"]

    async def process_request(self, req: func.HttpRequest) -> Union[Dict[str, Any], func.HttpResponse]:
        params = self.extract_path_params(req, ["container", "file_name"])
        container, file_name = params["container"], params["file_name"]
        services = await get_retail_services()

        if req.method == "GET":
            stream = await services.files.download_blob(file_name, container)
            mimetype = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
            return _attachment(stream.getvalue(), file_name, mimetype)

        deleted = await services.files.delete_blob(file_name, container)
        if not deleted:
            raise ResourceNotFoundError(f"Blob '{container}/{file_name}' not found", "RESOURCE_NOT_FOUND")
        return {"container": container, "file_name": file_name, "deleted": True}


class LogFilesTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("log_files")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        services = await get_retail_services()
        logs = await services.files.list_logs()
        return {"logs": [to_json(log) for log in logs], "count": len(logs)}


class LogItemTrigger(BaseHttpTrigger):
    """View or delete one log file."""

    def __init__(self):
        super().__init__("log_item")

    def get_allowed_methods(self) -> List[str]:
        return ["GET", "DELETE"]

    async def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        file_name = self.extract_path_params(req, ["file_name"])["file_name"]
        services = await get_retail_services()

        if req.method == "GET":
            content = await services.files.read_log(file_name)
            if content is None:
                raise ResourceNotFoundError(f"Log file '{file_name}' not found", "RESOURCE_NOT_FOUND")
            return {"file_name": file_name, "content": content}

        if not await services.files.delete_log(file_name):
            raise ResourceNotFoundError(f"Log file '{file_name}' not found", "RESOURCE_NOT_FOUND")
        return {"file_name": file_name, "deleted": True}


class LogDownloadTrigger(BaseHttpTrigger):
    def __init__(self):
        super().__init__("log_download")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    async def process_request(self, req: func.HttpRequest) -> func.HttpResponse:
        file_name = self.extract_path_params(req, ["file_name"])["file_name"]
        services = await get_retail_services()
        content = await services.files.read_log(file_name)
        if content is None:
            raise ResourceNotFoundError(f"Log file '{file_name}' not found", "RESOURCE_NOT_FOUND")
        return _attachment(content.encode("utf-8"), file_name, "text/plain")


blob_files_trigger = BlobFilesTrigger()
blob_item_trigger = BlobItemTrigger()
log_files_trigger = LogFilesTrigger()
log_item_trigger = LogItemTrigger()
log_download_trigger = LogDownloadTrigger()
