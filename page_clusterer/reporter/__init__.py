"""Модуль генерации отчетов."""

from .formatter import ReportFormatter
from .summary import SummaryGenerator

__all__ = ["ReportFormatter", "SummaryGenerator"]
