"""Кластеризация документов методом k-means."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .exceptions import EmptyClusterError, InvalidInputError
from .vectorizer import as_feature_matrix
from ..utils.helpers import group_indices
from ..utils.logger import get_logger

logger = get_logger(__name__)

DETERMINISTIC_SEED = 3

DistanceFunc = Callable[[np.ndarray, np.ndarray], float]


@dataclass
class KMeansResult:
    """Результат одного запуска k-means."""
    labels: np.ndarray
    centroids: np.ndarray
    n_iter: int
    converged: bool
    initial_indices: np.ndarray


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Евклидово расстояние между двумя векторами."""
    diff = a - b
    return float(np.sqrt(np.dot(diff, diff)))


def make_rng(deterministic: bool, seed: int = DETERMINISTIC_SEED) -> np.random.Generator:
    """
    Создает источник случайности для выбора начальных центроидов.

    Детерминированный режим использует PCG64 numpy с затравкой 3. Результат
    воспроизводим между запусками, но выбранные строки не совпадают с
    перестановкой java.util.Random(3) при той же затравке.

    Args:
        deterministic: Фиксированная затравка (воспроизводимый результат)
            или энтропия ОС (новый результат на каждый запуск)
        seed: Затравка для детерминированного режима

    Returns:
        Генератор numpy
    """
    if deterministic:
        return np.random.default_rng(seed)
    return np.random.default_rng()


def _check_n_clusters(n_clusters: int, n_samples: int) -> None:
    if n_clusters < 1 or n_clusters > n_samples:
        raise InvalidInputError(
            f"Число кластеров должно быть в диапазоне [1, {n_samples}], получено {n_clusters}"
        )


def select_initial_centroids(
    matrix: np.ndarray,
    n_clusters: int,
    rng: np.random.Generator
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Выбирает начальные центроиды среди строк матрицы.

    Индексы строк перемешиваются, центроидами становятся первые
    n_clusters строк перестановки.

    Args:
        matrix: Матрица признаков (n_samples, n_features)
        n_clusters: Число кластеров
        rng: Источник случайности

    Returns:
        Кортеж (центроиды (n_clusters, n_features), индексы выбранных строк)
    """
    _check_n_clusters(n_clusters, matrix.shape[0])

    order = rng.permutation(matrix.shape[0])
    indices = order[:n_clusters]
    return matrix[indices].copy(), indices


def assign_nearest_cluster(
    sample: np.ndarray,
    centroids: np.ndarray,
    distance: DistanceFunc = euclidean_distance
) -> int:
    """
    Возвращает индекс ближайшего центроида.

    При равенстве расстояний побеждает центроид с меньшим индексом.

    Args:
        sample: Вектор документа
        centroids: Центроиды (n_clusters, n_features)
        distance: Функция расстояния

    Returns:
        Номер кластера
    """
    sample = np.asarray(sample, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    if len(centroids) == 0:
        raise InvalidInputError("Не передано ни одного центроида")

    best_cluster = -1
    best_distance = np.inf
    for cluster_id, centroid in enumerate(centroids):
        dist = distance(sample, centroid)
        if dist < best_distance:
            best_distance = dist
            best_cluster = cluster_id

    if best_cluster < 0:
        raise InvalidInputError("Расстояние до центроидов не определено (NaN)")
    return best_cluster


def assign_all(
    matrix: np.ndarray,
    centroids: np.ndarray,
    distance: DistanceFunc = euclidean_distance,
    n_jobs: int = 1
) -> np.ndarray:
    """
    Назначает каждой строке матрицы ближайший кластер.

    Строки обрабатываются независимо; при n_jobs > 1 диапазоны строк
    распределяются по потокам, каждый пишет только свои ячейки результата.

    Args:
        matrix: Матрица признаков (n_samples, n_features)
        centroids: Центроиды (n_clusters, n_features)
        distance: Функция расстояния
        n_jobs: Количество потоков

    Returns:
        Метки кластеров (n_samples,)
    """
    if matrix.shape[1] != centroids.shape[1]:
        raise InvalidInputError(
            f"Размерность центроидов {centroids.shape[1]} не совпадает "
            f"с размерностью матрицы {matrix.shape[1]}"
        )

    n_samples = matrix.shape[0]
    labels = np.empty(n_samples, dtype=np.int64)

    def assign_range(start: int, stop: int) -> None:
        for row in range(start, stop):
            labels[row] = assign_nearest_cluster(matrix[row], centroids, distance)

    if n_jobs <= 1 or n_samples < 2:
        assign_range(0, n_samples)
        return labels

    bounds = np.linspace(0, n_samples, min(n_jobs, n_samples) + 1, dtype=int)
    with ThreadPoolExecutor(max_workers=n_jobs) as executor:
        futures = [
            executor.submit(assign_range, int(start), int(stop))
            for start, stop in zip(bounds[:-1], bounds[1:])
        ]
        for future in futures:
            future.result()

    return labels


def recompute_centroids(
    matrix: np.ndarray,
    labels: np.ndarray,
    n_clusters: int,
    iteration: int = 0
) -> np.ndarray:
    """
    Пересчитывает центроиды как среднее строк каждого кластера.

    Args:
        matrix: Матрица признаков (n_samples, n_features)
        labels: Текущие метки кластеров
        n_clusters: Число кластеров
        iteration: Номер итерации (для сообщения об ошибке)

    Returns:
        Центроиды (n_clusters, n_features)

    Raises:
        EmptyClusterError: Если в каком-то кластере не осталось строк
    """
    counts = np.bincount(labels, minlength=n_clusters)
    empty = np.flatnonzero(counts[:n_clusters] == 0)
    if empty.size:
        raise EmptyClusterError(int(empty[0]), iteration)

    centroids = np.zeros((n_clusters, matrix.shape[1]), dtype=np.float64)
    for cluster_id in range(n_clusters):
        centroids[cluster_id] = matrix[labels == cluster_id].mean(axis=0)
    return centroids


def run_kmeans(
    matrix,
    n_clusters: int,
    deterministic: bool = False,
    rng: Optional[np.random.Generator] = None,
    max_iter: Optional[int] = None,
    distance: DistanceFunc = euclidean_distance,
    n_jobs: int = 1
) -> KMeansResult:
    """
    Выполняет k-means до сходимости.

    Итерации продолжаются, пока новое назначение кластеров отличается от
    предыдущего. Без max_iter число итераций не ограничено.

    Args:
        matrix: Матрица признаков (n_samples, n_features)
        n_clusters: Число кластеров
        deterministic: Воспроизводимый выбор начальных центроидов
        rng: Явный источник случайности (имеет приоритет над deterministic)
        max_iter: Предел числа итераций
        distance: Функция расстояния
        n_jobs: Количество потоков для назначения кластеров

    Returns:
        KMeansResult
    """
    X = as_feature_matrix(matrix)
    _check_n_clusters(n_clusters, X.shape[0])
    if max_iter is not None and max_iter < 1:
        raise InvalidInputError(f"max_iter должен быть положительным, получено {max_iter}")

    if rng is None:
        rng = make_rng(deterministic)

    centroids, initial_indices = select_initial_centroids(X, n_clusters, rng)
    logger.debug(f"Начальные центроиды: строки {initial_indices.tolist()}")

    labels = assign_all(X, centroids, distance, n_jobs)

    n_iter = 0
    converged = False
    while max_iter is None or n_iter < max_iter:
        n_iter += 1
        centroids = recompute_centroids(X, labels, n_clusters, n_iter)
        new_labels = assign_all(X, centroids, distance, n_jobs)
        if np.array_equal(new_labels, labels):
            converged = True
            break
        labels = new_labels

    if converged:
        logger.info(f"k-means сошелся за {n_iter} итераций")
    else:
        logger.warning(f"k-means не сошелся за {max_iter} итераций, возвращаем последнее разбиение")

    return KMeansResult(
        labels=labels,
        centroids=centroids,
        n_iter=n_iter,
        converged=converged,
        initial_indices=initial_indices
    )


def cluster(matrix, n_clusters: int, deterministic: bool = False, **kwargs) -> np.ndarray:
    """
    Разбивает строки матрицы на n_clusters кластеров.

    Args:
        matrix: Матрица признаков (n_samples, n_features)
        n_clusters: Число кластеров
        deterministic: Воспроизводимый выбор начальных центроидов
        **kwargs: Параметры run_kmeans (rng, max_iter, distance, n_jobs)

    Returns:
        Метки кластеров (n_samples,)
    """
    return run_kmeans(matrix, n_clusters, deterministic, **kwargs).labels


class KMeansClusterer:
    """Класс для кластеризации документов."""

    def __init__(
        self,
        n_clusters: int = 3,
        deterministic: bool = True,
        max_iter: Optional[int] = None,
        n_jobs: int = 1
    ):
        """
        Инициализация кластеризатора.

        Args:
            n_clusters: Число кластеров
            deterministic: Воспроизводимый выбор начальных центроидов
            max_iter: Предел числа итераций (None - до сходимости)
            n_jobs: Количество потоков для назначения кластеров
        """
        self.n_clusters = n_clusters
        self.deterministic = deterministic
        self.max_iter = max_iter
        self.n_jobs = n_jobs
        self.centroids_: Optional[np.ndarray] = None
        self.n_iter_: int = 0
        self.converged_: bool = False

    def fit_predict(self, vectors, rng: Optional[np.random.Generator] = None) -> List[int]:
        """
        Выполняет кластеризацию векторов.

        Args:
            vectors: Матрица признаков или список векторов
            rng: Явный источник случайности

        Returns:
            Список меток кластеров
        """
        logger.info(f"Кластеризация {len(vectors)} документов на {self.n_clusters} кластера(ов)...")

        result = run_kmeans(
            vectors,
            self.n_clusters,
            deterministic=self.deterministic,
            rng=rng,
            max_iter=self.max_iter,
            n_jobs=self.n_jobs
        )
        self.centroids_ = result.centroids
        self.n_iter_ = result.n_iter
        self.converged_ = result.converged

        sizes = np.bincount(result.labels, minlength=self.n_clusters)
        logger.info(f"Размеры кластеров: {sizes.tolist()}")

        return result.labels.tolist()

    def get_cluster_info(self, labels: List[int]) -> Dict[int, Dict[str, Any]]:
        """
        Возвращает информацию о кластерах.

        Args:
            labels: Список меток кластеров

        Returns:
            Словарь {cluster_id: {size: int, indices: List[int]}}
        """
        return {
            label: {"size": len(indices), "indices": indices}
            for label, indices in group_indices(labels).items()
        }
