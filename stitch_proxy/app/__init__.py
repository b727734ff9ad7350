"""
Stitch Proxy Application
========================

Accepts multi-image uploads on /stitch and forwards them to the pano stitcher,
over HTTP multipart or gRPC depending on the GRPC setting.
"""
