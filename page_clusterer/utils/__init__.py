"""Утилиты для работы с логами и вспомогательными функциями."""

from .logger import setup_logger, get_logger
from .helpers import ensure_dir, format_datetime, group_indices

__all__ = ["setup_logger", "get_logger", "ensure_dir", "format_datetime", "group_indices"]
