"""gRPC Proto definitions for the pano stitcher client."""

from stitch_proxy.app.protos.stitcher_pb2 import (
    ImageData,
    StitchRequest,
    StitchResponse,
)
from stitch_proxy.app.protos.stitcher_pb2_grpc import (
    StitcherServicer,
    StitcherStub,
    add_StitcherServicer_to_server,
)

__all__ = [
    "ImageData",
    "StitchRequest",
    "StitchResponse",
    "StitcherServicer",
    "StitcherStub",
    "add_StitcherServicer_to_server",
]
