"""Метрики качества кластеризации k-means."""

from collections import Counter
from typing import Any, Dict, List, Optional

import numpy as np
from sklearn.metrics import calinski_harabasz_score, davies_bouldin_score, silhouette_score

from .vectorizer import as_feature_matrix
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ClusteringQualityMetrics:
    """Класс для расчета метрик качества кластеризации."""

    def evaluate(
        self,
        vectors,
        labels: List[int],
        centroids: Optional[np.ndarray] = None
    ) -> Dict[str, Any]:
        """
        Оценка качества разбиения.

        Args:
            vectors: Матрица признаков
            labels: Метки кластеров
            centroids: Центроиды (если не заданы, считаются по меткам)

        Returns:
            Словарь с метриками качества
        """
        X = as_feature_matrix(vectors)
        labels_arr = np.asarray(labels, dtype=np.int64)
        n_clusters = len(set(labels_arr.tolist()))

        metrics: Dict[str, Any] = {
            'n_clusters': n_clusters,
            'total_samples': len(labels_arr),
        }
        metrics.update(self._calculate_cluster_stats(labels_arr.tolist()))
        metrics['inertia'] = self._calculate_inertia(X, labels_arr, centroids)

        # Внешние метрики определены только для 2 <= k < n
        if 1 < n_clusters < len(labels_arr):
            metrics.update(self._calculate_external_metrics(X, labels_arr))

        logger.info(
            f"Качество кластеризации: инерция {metrics['inertia']:.4f}, "
            f"silhouette {metrics.get('silhouette_score', 'n/a')}"
        )
        return metrics

    def _calculate_cluster_stats(self, labels: List[int]) -> Dict[str, Any]:
        """Расчет статистики размеров кластеров."""
        cluster_sizes = Counter(labels)
        sizes = list(cluster_sizes.values())

        return {
            'avg_cluster_size': float(np.mean(sizes)),
            'max_cluster_size': max(sizes),
            'min_cluster_size': min(sizes),
            'cluster_size_std': float(np.std(sizes)),
            'dominant_cluster_ratio': max(sizes) / len(labels),
            'size_distribution': {int(k): v for k, v in sorted(cluster_sizes.items())}
        }

    def _calculate_inertia(
        self,
        X: np.ndarray,
        labels: np.ndarray,
        centroids: Optional[np.ndarray]
    ) -> float:
        """Сумма квадратов расстояний документов до центроидов своих кластеров."""
        inertia = 0.0
        for cluster_id in np.unique(labels):
            members = X[labels == cluster_id]
            if centroids is not None:
                center = centroids[cluster_id]
            else:
                center = members.mean(axis=0)
            inertia += float(np.sum((members - center) ** 2))
        return inertia

    def _calculate_external_metrics(self, X: np.ndarray, labels: np.ndarray) -> Dict[str, float]:
        """Расчет метрик scikit-learn."""
        metrics = {}

        try:
            # Диапазон [-1, 1], где 1 - хорошо разделенные кластеры
            metrics['silhouette_score'] = float(silhouette_score(X, labels, metric="euclidean"))
        except ValueError as e:
            logger.debug(f"Не удалось посчитать silhouette: {e}")

        try:
            # Чем выше, тем лучше
            metrics['calinski_harabasz_score'] = float(calinski_harabasz_score(X, labels))
        except ValueError as e:
            logger.debug(f"Не удалось посчитать Calinski-Harabasz: {e}")

        try:
            # Чем ниже, тем лучше
            metrics['davies_bouldin_score'] = float(davies_bouldin_score(X, labels))
        except ValueError as e:
            logger.debug(f"Не удалось посчитать Davies-Bouldin: {e}")

        return metrics
