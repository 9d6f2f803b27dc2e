"""Модуль анализа: векторизация и кластеризация."""

from .exceptions import ClusteringError, EmptyClusterError, InvalidInputError
from .vectorizer import TextVectorizer, apply_tfidf, hash_token, vectorize
from .cluster import KMeansClusterer, KMeansResult, cluster, run_kmeans
from .quality import ClusteringQualityMetrics

__all__ = [
    "TextVectorizer",
    "KMeansClusterer",
    "KMeansResult",
    "ClusteringQualityMetrics",
    "ClusteringError",
    "EmptyClusterError",
    "InvalidInputError",
    "hash_token",
    "vectorize",
    "apply_tfidf",
    "cluster",
    "run_kmeans",
]
