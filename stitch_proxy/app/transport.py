"""
Backend transport selection.

The transport is fixed for the lifetime of the process: it is derived from the
frozen Settings once, when the stitch handler is built.
"""

from enum import Enum

from .config import Settings


class TransportMode(str, Enum):
    HTTP = "http"
    RPC = "grpc"


def select_transport(settings: Settings) -> TransportMode:
    """Return the outbound transport configured by the GRPC flag."""
    return TransportMode.RPC if settings.GRPC else TransportMode.HTTP
