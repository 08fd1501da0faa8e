"""Error types raised across the rent board."""

from __future__ import annotations


class RentBoardError(Exception):
    """Base class for rent board errors."""


class RemoteStoreError(RentBoardError):
    """The remote store could not be reached or answered unusably."""


class LocalStoreError(RentBoardError):
    """The local store slot could not be written."""


class ImageError(RentBoardError):
    """Base class for image processing failures."""


class DecodeError(ImageError):
    """The source bytes could not be decoded as an image."""


class EncodeError(ImageError):
    """The decoded image could not be rendered or re-encoded."""


class ListingValidationError(RentBoardError):
    """A submitted post is missing required contact fields."""


class AdminAuthError(RentBoardError):
    """The admin passphrase was missing or wrong."""
