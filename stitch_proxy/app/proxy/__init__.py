"""
Proxy Package
=============

This package implements the /stitch endpoint, which accepts multi-image
uploads and forwards them to the pano stitcher.

Main Components:
----------------
- ingest.py: multipart parsing, size limit, image part extraction
- http_forwarder.py: re-encodes the upload as multipart and POSTs it
- rpc_forwarder.py: packs the upload into a StitchRequest gRPC call
- handler.py: method checks and dispatch to the configured forwarder
- routes.py: FastAPI router exposing /stitch

Usage:
------
    from stitch_proxy.app.proxy import stitch_router
    app.include_router(stitch_router)
"""

from .handler import StitchHandler
from .routes import stitch_router

__all__ = ["StitchHandler", "stitch_router"]
