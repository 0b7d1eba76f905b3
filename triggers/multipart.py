"""
Multipart Form Parsing.

Boundary-based multipart/form-data parsing for Azure Functions requests
(the cgi module is gone in Python 3.13). One file part is supported per
request; every other part is a text field.

Exports:
    parse_multipart: (IncomingFile or None, form fields)
    is_multipart: Content-Type check
"""

import re
from typing import Dict, Optional, Tuple

import azure.functions as func

from core.models import IncomingFile


def is_multipart(req: func.HttpRequest) -> bool:
    return "multipart/form-data" in req.headers.get("Content-Type", "")


def _boundary(content_type: str) -> str:
    # Format: multipart/form-data; boundary=----WebKitFormBoundary...
    for part in content_type.split(";"):
        part = part.strip()
        if part.startswith("boundary="):
            boundary = part[9:]
            if boundary.startswith('"') and boundary.endswith('"'):
                boundary = boundary[1:-1]
            return boundary
    raise ValueError("Could not extract boundary from Content-Type")


def parse_multipart(req: func.HttpRequest) -> Tuple[Optional[IncomingFile], Dict[str, str]]:
    """
    Parse multipart/form-data from an Azure Functions request.

    Returns:
        (file, fields): the uploaded file part (None when the form has no
        file or the file is empty) and the text fields by name

    Raises:
        ValueError: not multipart, or no boundary
    """
    content_type = req.headers.get("Content-Type", "")
    if "multipart/form-data" not in content_type:
        raise ValueError("Content-Type must be multipart/form-data")

    boundary_bytes = ("--" + _boundary(content_type)).encode("utf-8")
    parts = req.get_body().split(boundary_bytes)

    fields: Dict[str, str] = {}
    incoming = None

    # parts[0] is the preamble before the first delimiter
    for part in parts[1:]:
        # Closing delimiter: --boundary--
        if part.startswith(b"--"):
            break

        # Only the CRLF ending the delimiter line and the CRLF before the next
        # delimiter are framing; every other byte belongs to the part
        if part.startswith(b"\r\n"):
            part = part[2:]
        if part.endswith(b"\r\n"):
            part = part[:-2]

        header_end = part.find(b"\r\n\r\n")
        if header_end == -1:
            continue

        header_section = part[:header_end].decode("utf-8", errors="replace")
        part_body = part[header_end + 4:]

        name_match = re.search(r'name="([^"]*)"', header_section)
        filename_match = re.search(r'filename="([^"]*)"', header_section)
        part_content_type_match = re.search(
            r'Content-Type:\s*(.+)', header_section, re.IGNORECASE
        )

        if not name_match:
            continue

        if filename_match and filename_match.group(1):
            if part_body:
                incoming = IncomingFile(
                    file_name=filename_match.group(1),
                    data=part_body,
                    content_type=(
                        part_content_type_match.group(1).strip()
                        if part_content_type_match else "application/octet-stream"
                    )
                )
        elif not filename_match:
            fields[name_match.group(1)] = part_body.decode("utf-8", errors="replace")

    return incoming, fields
