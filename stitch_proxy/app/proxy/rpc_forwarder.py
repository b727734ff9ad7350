"""
gRPC Forwarder
==============

Packs the uploaded images into a single StitchRequest and calls
stitcher.Stitcher/Process on GRPC_TARGET. The StitchResponse is mapped onto an
HTTP response:

- Content-Type        <- response.content_type
- Content-Disposition <- attachment; filename="<response.filename>"
- body                <- response.image_bytes

One channel is opened per call and closed when the call completes, on every
path.
"""

import logging
from typing import Any, Callable, List

import grpc
from fastapi import Response, status

from ..config import Settings
from ..errors import InternalError
from ..models import UploadedFile
from ..protos import ImageData, StitchRequest, StitchResponse, StitcherStub

logger = logging.getLogger(__name__)

# The stitcher is always asked for webp, whatever the input format
OUTPUT_FORMAT = "webp"


def build_stitch_request(files: List[UploadedFile], key: str) -> StitchRequest:
    """Build the StitchRequest message, preserving upload order."""
    return StitchRequest(
        images=[ImageData(filename=f.filename, content=f.content) for f in files],
        format=OUTPUT_FORMAT,
        key=key,
    )


def build_stitch_response(reply: StitchResponse) -> Response:
    """Map a StitchResponse onto the HTTP response sent to the caller."""
    response = Response(
        content=reply.image_bytes,
        status_code=status.HTTP_200_OK,
        media_type=reply.content_type or None,
    )
    response.headers["Content-Disposition"] = f'attachment; filename="{reply.filename}"'
    return response


class RpcForwarder:
    """
    Forwards an upload to the stitcher over gRPC.

    Args:
        settings: Application settings (GRPC_TARGET, PANO_KEY, timeout)
        channel_factory: Opens a channel for a target; must be usable as an
            async context manager. Defaults to grpc.aio.insecure_channel.
        stub_factory: Wraps a channel in a client stub.
    """

    def __init__(
        self,
        settings: Settings,
        channel_factory: Callable[[str], Any] = grpc.aio.insecure_channel,
        stub_factory: Callable[[Any], Any] = StitcherStub,
    ):
        self._target = settings.GRPC_TARGET
        self._key = settings.PANO_KEY
        self._call_timeout = settings.BACKEND_TIMEOUT_SECONDS
        self._channel_factory = channel_factory
        self._stub_factory = stub_factory

    async def forward(self, files: List[UploadedFile]) -> Response:
        """
        Send one Process call carrying every file and map its reply.

        The call does not wait for the channel to become ready, so a refused
        connection fails on the first attempt.

        Raises:
            InternalError: On connection failure or a failed call
        """
        stitch_request = build_stitch_request(files, self._key)

        async with self._channel_factory(self._target) as channel:
            stub = self._stub_factory(channel)
            logger.info(
                f"Sending gRPC request with {len(stitch_request.images)} image(s) to {self._target}",
                extra={
                    "file_count": len(stitch_request.images),
                    "buffer_bytes": sum(len(f.content) for f in files),
                },
            )

            try:
                reply = await stub.Process(stitch_request, timeout=self._call_timeout)
            except grpc.RpcError as e:
                code = e.code() if hasattr(e, "code") else None
                details = e.details() if hasattr(e, "details") else str(e)
                if code == grpc.StatusCode.UNAVAILABLE:
                    logger.error(f"Failed to connect to gRPC server at {self._target}: {details}")
                    raise InternalError("Failed to connect to gRPC server") from e
                logger.error(f"gRPC processing failed ({code}): {details}")
                raise InternalError(f"gRPC processing failed: {details}") from e

        logger.info(
            "Received stitched image over gRPC",
            extra={
                "content_type": reply.content_type,
                "response_bytes": len(reply.image_bytes),
            },
        )
        return build_stitch_response(reply)
