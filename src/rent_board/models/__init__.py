"""Data models for the rent board."""

from .listing import Listing, ListingList, UploadResult

__all__ = ["Listing", "ListingList", "UploadResult"]
