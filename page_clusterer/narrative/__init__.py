"""Модуль описания кластеров."""

from .builder import ClusterReportBuilder

__all__ = ["ClusterReportBuilder"]
