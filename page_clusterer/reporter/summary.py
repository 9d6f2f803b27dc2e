"""Генерация текстового резюме кластеризации."""

from datetime import datetime
from typing import Any, Dict, List

from ..utils.helpers import format_datetime


class SummaryGenerator:
    """Класс для генерации текстового резюме."""

    def generate(
        self,
        clusters: List[Dict[str, Any]],
        total_documents: int,
        analysis_date: datetime
    ) -> str:
        """
        Генерирует текстовое резюме.

        Args:
            clusters: Описания кластеров
            total_documents: Общее количество документов
            analysis_date: Дата анализа

        Returns:
            Текстовое резюме
        """
        lines = []
        lines.append("=" * 60)
        lines.append(f"CLUSTERS - {format_datetime(analysis_date, '%d.%m.%Y %H:%M')}")
        lines.append("=" * 60)
        lines.append(f"Documents: {total_documents}, clusters: {len(clusters)}")
        lines.append("")

        # Номера кластеров совпадают с метками, пустые кластеры не печатаются
        for cluster in clusters:
            lines.append(f"Cluster {cluster['cluster_id'] + 1}: ({cluster['size']})")
            if cluster["keywords"]:
                lines.append(f"  keywords: {', '.join(cluster['keywords'][:5])}")
            for title in cluster["titles"]:
                lines.append(f"  {title}")
            lines.append("")

        lines.append("=" * 60)

        return "\n".join(lines)
