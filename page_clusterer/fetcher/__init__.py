"""Модуль загрузки страниц."""

from .page_fetcher import Document, FetchError, PageFetcher, strip_references, title_from_url

__all__ = ["Document", "FetchError", "PageFetcher", "strip_references", "title_from_url"]
