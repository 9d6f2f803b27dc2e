"""Построение описаний кластеров для отчета."""

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from ..fetcher.page_fetcher import Document
from ..utils.helpers import group_indices
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ClusterReportBuilder:
    """Класс для построения описаний кластеров."""

    def __init__(self, top_keywords: int = 10, top_titles: Optional[int] = None):
        """
        Инициализация builder.

        Args:
            top_keywords: Количество ключевых слов для извлечения
            top_titles: Количество заголовков в описании кластера (None - все страницы)
        """
        self.top_keywords = top_keywords
        self.top_titles = top_titles

    def build(self, documents: Sequence[Document], labels: Sequence[int]) -> List[Dict[str, Any]]:
        """
        Группирует документы по кластерам.

        Args:
            documents: Документы в порядке строк матрицы
            labels: Метки кластеров

        Returns:
            Список описаний кластеров, упорядоченный по номеру кластера
        """
        if len(documents) != len(labels):
            raise ValueError(
                f"Количество документов ({len(documents)}) не совпадает "
                f"с количеством меток ({len(labels)})"
            )

        result = [
            self._build_single_cluster(documents, indices, cluster_id)
            for cluster_id, indices in group_indices(labels).items()
        ]

        logger.info(f"Построено {len(result)} описаний кластеров")
        return result

    def _build_single_cluster(
        self,
        documents: Sequence[Document],
        indices: List[int],
        cluster_id: int
    ) -> Dict[str, Any]:
        cluster_docs = [documents[i] for i in indices]

        # Хешированные признаки не отображаются обратно в слова, поэтому
        # ключевые слова берутся из исходных токенов
        word_freq = Counter()
        for doc in cluster_docs:
            word_freq.update(doc.tokens)
        keywords = [word for word, _ in word_freq.most_common(self.top_keywords)]

        titles = [doc.title for doc in cluster_docs]
        if self.top_titles is not None:
            titles = titles[:self.top_titles]

        return {
            "cluster_id": cluster_id,
            "size": len(cluster_docs),
            "keywords": keywords,
            "titles": titles,
            "urls": [doc.url for doc in cluster_docs],
        }
