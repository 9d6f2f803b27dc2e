"""Кластеризация веб-страниц: хеширование признаков, tf-idf и k-means."""

__version__ = "0.1.0"
