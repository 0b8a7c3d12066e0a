"""HTTP integration."""

from parley.infrastructure.http.content_fetcher import HttpContentFetcher
from parley.infrastructure.http.media import MediaDownloader

__all__ = ["HttpContentFetcher", "MediaDownloader"]
