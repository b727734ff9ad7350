"""
Proxy Routes - Stitch Request Forwarding
========================================

Endpoints:
----------
- POST /stitch: Forward uploaded images to the pano stitcher
- OPTIONS /stitch: CORS preflight

Any other method on /stitch is refused by the router with a 405, which the
application renders as the proxy's plain-text MethodError.
"""

from fastapi import APIRouter, HTTPException, Request, Response, status

from .handler import StitchHandler

# Create router
stitch_router = APIRouter()

ROUTED_METHODS = ["POST", "OPTIONS"]


def get_stitch_handler(request: Request) -> StitchHandler:
    """
    Get the stitch handler built by the application factory.

    Raises:
        HTTPException: If the application was not built by create_app
    """
    handler = getattr(request.app.state, "stitch_handler", None)
    if handler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Stitch handler not initialized",
        )
    return handler


@stitch_router.api_route("/stitch", methods=ROUTED_METHODS)
async def stitch(request: Request) -> Response:
    """
    Forward a multipart image upload to the pano stitcher.

    The request body must be multipart/form-data with one ``images`` part per
    image. The response is whatever the stitcher returned: its status and
    body over HTTP, or the stitched image as an attachment over gRPC.
    """
    handler = get_stitch_handler(request)
    return await handler.handle(request)
