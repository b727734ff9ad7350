"""
Shared fixtures for the stitch proxy tests.

Outbound HTTP is served by httpx.MockTransport and gRPC mostly by in-process
fakes; the gRPC integration tests start a real server on 127.0.0.1.
"""

import asyncio
from typing import List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette.datastructures import Headers
from starlette.formparsers import MultiPartParser

from stitch_proxy.app.config import Settings
from stitch_proxy.app.main import create_app
from stitch_proxy.app.proxy import StitchHandler


JPEG_A = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00a-image-bytes\xff\xd9"
JPEG_B = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00b-image-bytes\xff\xd9"


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture
def http_settings():
    """Settings for a proxy forwarding over HTTP"""
    return Settings(
        _env_file=None,
        GRPC=False,
        PANO_URL="http://stitcher.test/stitch",
        PANO_KEY="test-pano-key",
    )


@pytest.fixture
def grpc_settings():
    """Settings for a proxy forwarding over gRPC"""
    return Settings(
        _env_file=None,
        GRPC=True,
        GRPC_TARGET="stitcher.test:50051",
        PANO_KEY="test-pano-key",
    )


@pytest.fixture
def two_images():
    """Two JPEG parts under the images field"""
    return [
        ("images", ("a.jpg", JPEG_A, "image/jpeg")),
        ("images", ("b.jpg", JPEG_B, "image/jpeg")),
    ]


# ============================================================================
# Fake Backends
# ============================================================================

class RecordingBackend:
    """httpx.MockTransport handler that records requests to the stitcher"""

    def __init__(self, response: Optional[httpx.Response] = None, error: Optional[Exception] = None):
        self.response = response or httpx.Response(
            200, headers={"Content-Type": "image/webp"}, content=b"WEBPDATA"
        )
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class FakeChannel:
    """Stand-in for grpc.aio.Channel used as an async context manager"""

    def __init__(self, target: str):
        self.target = target
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True


class FakeChannelFactory:
    def __init__(self):
        self.channels: List[FakeChannel] = []

    def __call__(self, target: str) -> FakeChannel:
        channel = FakeChannel(target)
        self.channels.append(channel)
        return channel


class FakeStitcherStub:
    """Stub factory and stub in one: records every Process call"""

    def __init__(self, reply=None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.requests = []
        self.channel = None

    def __call__(self, channel):
        self.channel = channel
        return self

    async def Process(self, request, timeout=None):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


# ============================================================================
# Helpers
# ============================================================================

def make_client(settings: Settings, **handler_kwargs) -> TestClient:
    """Build a test client whose stitch handler uses the given collaborators"""
    app = create_app(settings)
    app.state.stitch_handler = StitchHandler(settings, **handler_kwargs)
    return TestClient(app)


def parse_forwarded_multipart(request: httpx.Request) -> List[Tuple[str, str, bytes]]:
    """Decode the multipart body sent to the stitcher into (field, filename, bytes)"""

    async def _parse():
        async def body():
            yield request.content

        headers = Headers(headers={"content-type": request.headers["content-type"]})
        form = await MultiPartParser(headers, body()).parse()
        try:
            return [
                (field, value.filename, await value.read())
                for field, value in form.multi_items()
            ]
        finally:
            await form.close()

    return asyncio.run(_parse())
