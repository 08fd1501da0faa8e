from .jsonify import jsonify, jsonify_listings
from .log import InlineImageFormatter, configure_logging

__all__ = ["jsonify", "jsonify_listings", "InlineImageFormatter", "configure_logging"]
