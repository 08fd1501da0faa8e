"""Listing stores and the repository that chooses between them."""

from .base import ListingStore
from .listings import ListingRepository
from .local import LocalStore
from .remote import RemoteStore

__all__ = ["ListingStore", "ListingRepository", "LocalStore", "RemoteStore"]
