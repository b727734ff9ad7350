"""
HTTP Forwarder
==============

Re-encodes the uploaded images as a new multipart body and POSTs it to the
pano stitcher (PANO_URL). The stitcher's status code, Content-Type and body are
passed back to the caller unchanged.

Headers sent to the stitcher:
-----------------------------
- Content-Type: multipart/form-data; boundary=... (set by httpx)
- x-internal-key: PANO_KEY
"""

import logging
from typing import List, Optional

import httpx
from fastapi import Response

from ..config import Settings
from ..errors import InternalError, UpstreamUnavailable
from ..models import UploadedFile

logger = logging.getLogger(__name__)

INTERNAL_KEY_HEADER = "x-internal-key"


def build_multipart_files(files: List[UploadedFile]) -> list:
    """Map uploaded files onto httpx ``files=`` entries, all under ``images``."""
    return [
        ("images", (f.filename, f.content, f.content_type))
        for f in files
    ]


class HttpForwarder:
    """
    Forwards an upload to the stitcher over HTTP.

    A fresh AsyncClient is opened per request and closed before the response
    is returned, so no connection outlives the request that opened it.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = settings.pano_url_str
        self._key = settings.PANO_KEY
        self._timeout = httpx.Timeout(settings.BACKEND_TIMEOUT_SECONDS)
        self._transport = transport

    async def forward(self, files: List[UploadedFile]) -> Response:
        """
        POST the files to the stitcher and copy its response back.

        Raises:
            InternalError: If the outbound request cannot be built
            UpstreamUnavailable: If the stitcher cannot be reached
        """
        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            try:
                outbound = client.build_request(
                    "POST",
                    self._url,
                    files=build_multipart_files(files),
                    headers={INTERNAL_KEY_HEADER: self._key},
                )
            except (httpx.InvalidURL, TypeError, ValueError) as e:
                logger.error(f"Failed to create forward request: {e}")
                raise InternalError("Failed to create forward request") from e

            logger.info(
                f"Forwarding {len(files)} file(s) to pano stitcher",
                extra={
                    "file_count": len(files),
                    "buffer_bytes": sum(len(f.content) for f in files),
                    "url": self._url,
                },
            )

            try:
                backend_response = await client.send(outbound)
            except httpx.TransportError as e:
                logger.error(f"Failed to reach pano stitcher at {self._url}: {e!r}")
                raise UpstreamUnavailable(f"Failed to reach pano stitcher: {e}") from e

        logger.info(
            "Pano stitcher responded",
            extra={
                "status_code": backend_response.status_code,
                "response_bytes": len(backend_response.content),
            },
        )

        response = Response(
            content=backend_response.content,
            status_code=backend_response.status_code,
        )
        backend_content_type = backend_response.headers.get("content-type")
        if backend_content_type:
            response.headers["Content-Type"] = backend_content_type
        return response
