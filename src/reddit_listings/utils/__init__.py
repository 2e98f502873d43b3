"""Logging utilities."""

from reddit_listings.utils.logger import get_logger, log_listing_fetch, setup_logging

__all__ = ["get_logger", "log_listing_fetch", "setup_logging"]
