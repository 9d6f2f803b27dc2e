"""Исключения модуля анализа."""


class ClusteringError(Exception):
    """Базовая ошибка векторизации и кластеризации."""
    pass


class InvalidInputError(ClusteringError, ValueError):
    """Некорректные входные данные: пустая или рваная матрица, неверное k."""
    pass


class EmptyClusterError(ClusteringError):
    """Кластер потерял всех участников во время итераций k-means."""

    def __init__(self, cluster_id: int, iteration: int = 0):
        self.cluster_id = cluster_id
        self.iteration = iteration
        super().__init__(
            f"Кластер {cluster_id} остался без документов на итерации {iteration}. "
            f"Уменьшите число кластеров или смените начальные центроиды."
        )
