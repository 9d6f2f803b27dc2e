"""Форматирование отчетов в JSON."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils.logger import get_logger
from ..utils.helpers import ensure_dir

logger = get_logger(__name__)


class ReportFormatter:
    """Класс для форматирования отчетов."""

    def __init__(self, reports_dir: Path, date_format: str = "%Y-%m-%d"):
        """
        Инициализация formatter.

        Args:
            reports_dir: Директория для сохранения отчетов
            date_format: Формат даты в имени файла
        """
        self.reports_dir = ensure_dir(reports_dir)
        self.date_format = date_format

    def build_report(
        self,
        clusters: List[Dict[str, Any]],
        total_documents: int,
        analysis_date: datetime,
        quality: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Собирает словарь отчета."""
        report = {
            "analysis_date": analysis_date.isoformat(),
            "total_documents": total_documents,
            "clusters_count": len(clusters),
            "clusters": clusters
        }
        if quality is not None:
            report["quality"] = quality
        return report

    def save_report(
        self,
        clusters: List[Dict[str, Any]],
        total_documents: int,
        analysis_date: datetime,
        quality: Optional[Dict[str, Any]] = None
    ) -> Path:
        """
        Сохраняет отчет в JSON файл.

        Args:
            clusters: Описания кластеров
            total_documents: Общее количество документов
            analysis_date: Дата анализа
            quality: Метрики качества кластеризации

        Returns:
            Путь к сохраненному файлу
        """
        report = self.build_report(clusters, total_documents, analysis_date, quality)

        filename = f"report_{analysis_date.strftime(self.date_format)}.json"
        filepath = self.reports_dir / filename

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False, indent=2, default=_json_default)

        logger.info(f"Отчет сохранен: {filepath}")
        return filepath


def _json_default(value: Any) -> Any:
    # numpy-скаляры в метриках качества
    if hasattr(value, "item"):
        return value.item()
    raise TypeError(f"Объект типа {type(value).__name__} не сериализуется в JSON")
