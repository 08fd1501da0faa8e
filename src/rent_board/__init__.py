"""Community rental-listing board: listing persistence and synchronization."""
