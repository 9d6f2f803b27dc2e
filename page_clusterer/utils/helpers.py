"""Вспомогательные функции."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Union


def ensure_dir(path: Union[str, Path]) -> Path:
    """Создает директорию, если она не существует, и возвращает ее путь."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def format_datetime(dt: datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Форматирует datetime в строку."""
    return dt.strftime(fmt)


def group_indices(labels: Iterable[int]) -> Dict[int, List[int]]:
    """
    Группирует позиции элементов по меткам кластеров.

    Args:
        labels: Метки кластеров

    Returns:
        Словарь {метка: [индексы]} в порядке возрастания меток
    """
    groups: Dict[int, List[int]] = {}
    for idx, label in enumerate(labels):
        groups.setdefault(int(label), []).append(idx)
    return dict(sorted(groups.items()))
