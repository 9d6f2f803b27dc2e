"""Векторизация токенов: хеширование признаков и взвешивание tf-idf."""

from typing import Optional, Sequence

import numpy as np

from .exceptions import InvalidInputError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_N_FEATURES = 2 ** 16

_HASH_SEED = 7
_HASH_MULTIPLIER = 17


def hash_token(token: str, max_hash: int) -> int:
    """
    Хеширует токен в индекс признака из диапазона [0, max_hash).

    Полиномиальный хеш с затравкой 7 и множителем 17, накапливается в
    32-битном знаковом целом (с переполнением), поэтому индексы совпадают
    между запусками и реализациями.

    Args:
        token: Токен
        max_hash: Верхняя граница диапазона (не включительно)

    Returns:
        Индекс признака
    """
    if max_hash < 1:
        raise InvalidInputError(f"max_hash должен быть положительным, получено {max_hash}")

    h = _HASH_SEED
    for ch in token:
        h = (h * _HASH_MULTIPLIER + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000

    return abs(h) % max_hash


def as_feature_matrix(data) -> np.ndarray:
    """
    Приводит данные к плотной матрице float64 и проверяет форму.

    Args:
        data: Матрица или список строк одинаковой длины

    Returns:
        Матрица (n_samples, n_features)
    """
    try:
        matrix = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Строки матрицы должны иметь одинаковую длину: {e}") from e

    if matrix.ndim != 2:
        raise InvalidInputError(f"Ожидалась двумерная матрица, получено измерений: {matrix.ndim}")
    if matrix.shape[0] == 0 or matrix.shape[1] == 0:
        raise InvalidInputError(f"Пустая матрица признаков: {matrix.shape}")
    if not np.all(np.isfinite(matrix)):
        raise InvalidInputError("Матрица содержит NaN или бесконечные значения")

    return matrix


def vectorize(token_sequences: Sequence[Sequence[str]], n_features: int) -> np.ndarray:
    """
    Считает токены каждого документа в хешированном пространстве признаков.

    Args:
        token_sequences: Списки токенов, по одному на документ
        n_features: Размерность пространства признаков

    Returns:
        Матрица частот (n_documents, n_features)
    """
    if n_features < 1:
        raise InvalidInputError(f"n_features должен быть положительным, получено {n_features}")
    if len(token_sequences) == 0:
        raise InvalidInputError("Нет документов для векторизации")

    matrix = np.zeros((len(token_sequences), n_features), dtype=np.float64)
    for row, tokens in enumerate(token_sequences):
        if isinstance(tokens, str):
            raise InvalidInputError(
                f"Документ {row} передан строкой, ожидалась последовательность токенов"
            )
        for token in tokens:
            matrix[row, hash_token(token, n_features)] += 1

    return matrix


def apply_tfidf(matrix) -> np.ndarray:
    """
    Перевзвешивает частоты статистикой tf-idf.

    Для ненулевой частоты m в документе с общим числом токенов w вес равен
    (m / w) * ln(m / n_samples). Под логарифмом стоит сама частота, а не
    документная частота признака. Нули остаются нулями.

    Args:
        matrix: Матрица сырых частот (n_samples, n_features)

    Returns:
        Новая матрица той же формы
    """
    weighted, _ = _tfidf(matrix)
    return weighted


def _tfidf(matrix):
    counts = as_feature_matrix(matrix)
    if np.any(counts < 0):
        raise InvalidInputError("Частоты токенов не могут быть отрицательными")

    n_samples = counts.shape[0]
    word_count = counts.sum(axis=1)
    doc_frequency = np.count_nonzero(counts > 0, axis=0)

    weighted = np.zeros_like(counts)
    rows, cols = np.nonzero(counts)
    values = counts[rows, cols]
    weighted[rows, cols] = (values / word_count[rows]) * np.log(values / n_samples)

    return weighted, doc_frequency


class TextVectorizer:
    """Класс для векторизации токенизированных документов."""

    def __init__(self, n_features: int = DEFAULT_N_FEATURES):
        """
        Инициализация векторизатора.

        Args:
            n_features: Размерность хешированного пространства признаков
        """
        if n_features < 1:
            raise InvalidInputError(f"n_features должен быть положительным, получено {n_features}")
        self.n_features = n_features
        self.doc_frequency_: Optional[np.ndarray] = None

    def vectorize(self, token_sequences: Sequence[Sequence[str]]) -> np.ndarray:
        """Возвращает матрицу сырых частот."""
        logger.info(f"Векторизация {len(token_sequences)} документов...")
        matrix = vectorize(token_sequences, self.n_features)
        logger.debug(f"Всего токенов: {int(matrix.sum())}")
        return matrix

    def apply_tfidf(self, matrix) -> np.ndarray:
        """Взвешивает матрицу частот tf-idf и запоминает документные частоты."""
        weighted, self.doc_frequency_ = _tfidf(matrix)
        logger.info(
            f"Активных признаков: {int(np.count_nonzero(self.doc_frequency_))} "
            f"из {self.n_features}"
        )
        return weighted

    def fit_transform(self, token_sequences: Sequence[Sequence[str]]) -> np.ndarray:
        """
        Векторизует документы и взвешивает их tf-idf.

        Args:
            token_sequences: Списки токенов, по одному на документ

        Returns:
            Матрица признаков (n_documents, n_features)
        """
        return self.apply_tfidf(self.vectorize(token_sequences))

    def get_feature_index(self, token: str) -> int:
        """Индекс признака, в который попадает токен."""
        return hash_token(token, self.n_features)
