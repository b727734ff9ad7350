"""
Stitch request handler.

Flow per request:
    OPTIONS             -> 200, empty body (CORS preflight)
    anything but POST   -> 405
    POST                -> parse upload (400 on failure)
                        -> read every image into memory (500 on failure)
                        -> forward over the transport chosen at startup
"""

import logging
from typing import Optional

import httpx
from fastapi import Request, Response, status

from ..config import Settings
from ..errors import MethodError
from ..transport import TransportMode, select_transport
from .http_forwarder import HttpForwarder
from .ingest import ingest_upload, read_uploaded_files
from .rpc_forwarder import RpcForwarder

logger = logging.getLogger(__name__)


class StitchHandler:
    """
    Holds the immutable per-process configuration and both forwarders.

    Built once by the application factory and shared by all requests; it keeps
    no per-request state.
    """

    def __init__(
        self,
        settings: Settings,
        http_forwarder: Optional[HttpForwarder] = None,
        rpc_forwarder: Optional[RpcForwarder] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.mode = select_transport(settings)
        self.http_forwarder = http_forwarder or HttpForwarder(settings, transport=http_transport)
        self.rpc_forwarder = rpc_forwarder or RpcForwarder(settings)

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK)

        if request.method != "POST":
            logger.info(f"Rejected {request.method} request to {request.url.path}")
            raise MethodError()

        async with ingest_upload(request, self.settings.MAX_UPLOAD_BYTES) as parts:
            files = await read_uploaded_files(parts)

        if self.mode is TransportMode.RPC:
            return await self.rpc_forwarder.forward(files)
        return await self.http_forwarder.forward(files)
