"""
Upload Ingestor
===============

Parses the inbound multipart body straight from the request stream, bounded
by MAX_UPLOAD_BYTES, and yields the image file parts in the order the client
submitted them. Parts are held in memory only; nothing is spooled to disk.

The parsed form is closed when the ``ingest_upload`` context exits, whichever
way it exits.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import Request
from starlette.datastructures import Headers, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser

from ..errors import InternalError, ValidationError
from ..models import DEFAULT_PART_CONTENT_TYPE, UploadedFile

logger = logging.getLogger(__name__)

# "images[]" is what the browser uploader posts
IMAGE_FIELD_NAMES = ("images", "images[]")


class InMemoryMultiPartParser(MultiPartParser):
    """MultiPartParser that never rolls a part over to a temporary file."""

    def __init__(self, headers: Headers, stream: AsyncIterator[bytes], max_bytes: int):
        super().__init__(headers, stream)
        # a part can never exceed the whole upload
        self.spool_max_size = max_bytes


def _upload_too_large(max_bytes: int) -> ValidationError:
    return ValidationError(f"Failed to parse form: upload exceeds {max_bytes} bytes")


async def limited_stream(request: Request, max_bytes: int) -> AsyncIterator[bytes]:
    """
    Yield the request body chunk by chunk, refusing more than max_bytes.

    Raises:
        ValidationError: If the declared or actual body size exceeds max_bytes
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > max_bytes:
        raise _upload_too_large(max_bytes)

    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise _upload_too_large(max_bytes)
        yield chunk


@asynccontextmanager
async def ingest_upload(request: Request, max_bytes: int) -> AsyncIterator[List[UploadFile]]:
    """
    Parse the request as multipart/form-data and yield its image parts.

    Args:
        request: Inbound request
        max_bytes: Maximum accepted body size

    Yields:
        Non-empty list of file parts under ``images`` (or ``images[]``),
        in submission order

    Raises:
        ValidationError: Non-multipart body, malformed multipart, size
            exceeded, or no image parts
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise ValidationError("Failed to parse form: expected multipart/form-data")

    parser = InMemoryMultiPartParser(request.headers, limited_stream(request, max_bytes), max_bytes)
    try:
        form = await parser.parse()
    except (MultiPartException, ValueError) as e:
        logger.warning(f"Rejected malformed multipart upload: {e}")
        raise ValidationError("Failed to parse form") from e

    try:
        parts = [
            value
            for key, value in form.multi_items()
            if key in IMAGE_FIELD_NAMES and not isinstance(value, str)
        ]
        if not parts:
            raise ValidationError("No images field found")

        logger.debug("Parsed multipart upload", extra={"file_count": len(parts)})
        yield parts
    finally:
        await form.close()


async def read_uploaded_files(parts: List[UploadFile]) -> List[UploadedFile]:
    """
    Load every part into an UploadedFile, in order.

    Each part is closed as soon as it has been copied out, so an upload is
    held roughly once. All parts are read before anything is sent, so a
    failure here means nothing reaches the backend.

    Raises:
        InternalError: If any part cannot be read
    """
    files = []
    for part in parts:
        try:
            await part.seek(0)
            content = await part.read()
        except OSError as e:
            logger.error(f"Failed to read uploaded file {part.filename!r}: {e}")
            raise InternalError("Failed to read file") from e

        files.append(
            UploadedFile(
                filename=part.filename or "",
                content=content,
                content_type=part.content_type or DEFAULT_PART_CONTENT_TYPE,
            )
        )
        await part.close()
    return files
