"""Service layer for the rent board."""

from .board import BoardService, ListingDraft, build_board
from .encoder import ImageEncoder
from .environment import EnvironmentDetector, remote_available
from .transport import ImageTransport

__all__ = [
    "BoardService",
    "ListingDraft",
    "build_board",
    "ImageEncoder",
    "EnvironmentDetector",
    "remote_available",
    "ImageTransport",
]
