"""Конвейер кластеризации страниц: загрузка, токенизация, векторизация, k-means."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .analyzer import ClusteringQualityMetrics, KMeansClusterer, TextVectorizer
from .analyzer.exceptions import InvalidInputError
from .config.settings import Settings
from .fetcher import Document, PageFetcher
from .narrative import ClusterReportBuilder
from .preprocessor import TextCleaner
from .reporter import ReportFormatter, SummaryGenerator
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Результат запуска конвейера."""
    documents: List[Document]
    labels: List[int]
    clusters: List[Dict[str, Any]]
    quality: Dict[str, Any]
    summary: str
    n_iter: int
    converged: bool
    report_path: Optional[Path] = None
    analysis_date: datetime = field(default_factory=datetime.now)


class ClusteringPipeline:
    """Класс, связывающий этапы кластеризации страниц."""

    def __init__(self, settings: Settings, fetcher: Optional[PageFetcher] = None):
        """
        Инициализация конвейера.

        Args:
            settings: Настройки приложения
            fetcher: Загрузчик страниц (по умолчанию создается из настроек)
        """
        self.settings = settings
        self.fetcher = fetcher or PageFetcher(
            timeout=settings.fetch_timeout,
            user_agent=settings.user_agent,
            reference_marker=settings.reference_marker
        )
        self.cleaner = TextCleaner(
            stopwords_extra=settings.stopwords_extra,
            min_word_length=settings.min_word_length,
            max_word_length=settings.max_word_length,
            remove_stopwords=settings.remove_stopwords
        )
        self.vectorizer = TextVectorizer(n_features=settings.n_features)

    def run(
        self,
        urls: Optional[List[str]] = None,
        n_clusters: Optional[int] = None,
        deterministic: Optional[bool] = None,
        save_report: bool = True,
        rng: Optional[np.random.Generator] = None
    ) -> PipelineResult:
        """
        Запускает полный цикл кластеризации.

        Args:
            urls: Адреса страниц (по умолчанию из настроек)
            n_clusters: Число кластеров (по умолчанию из настроек)
            deterministic: Режим выбора начальных центроидов (по умолчанию из настроек)
            save_report: Сохранять ли JSON-отчет
            rng: Явный источник случайности для k-means

        Returns:
            PipelineResult
        """
        urls = urls if urls else self.settings.urls
        n_clusters = n_clusters if n_clusters is not None else self.settings.n_clusters
        if deterministic is None:
            deterministic = self.settings.deterministic

        if not urls:
            raise InvalidInputError("Не задано ни одного адреса страницы")

        # 1. Загрузка
        documents = self.fetcher.fetch_all(urls)
        if len(documents) < n_clusters:
            raise InvalidInputError(
                f"Загружено {len(documents)} страниц, этого недостаточно для {n_clusters} кластеров"
            )

        # 2. Предобработка
        logger.info("Предобработка текста...")
        for doc in documents:
            doc.tokens = self.cleaner.preprocess(doc.text)
            if not doc.tokens:
                logger.warning(f"Страница {doc.url} не содержит токенов")

        # 3. Векторизация
        matrix = self.vectorizer.fit_transform([doc.tokens for doc in documents])

        # 4. Кластеризация
        clusterer = KMeansClusterer(
            n_clusters=n_clusters,
            deterministic=deterministic,
            max_iter=self.settings.max_iter,
            n_jobs=self.settings.n_jobs
        )
        labels = clusterer.fit_predict(matrix, rng=rng)

        # 5. Отчет
        quality = ClusteringQualityMetrics().evaluate(matrix, labels, clusterer.centroids_)
        clusters = ClusterReportBuilder(
            top_keywords=self.settings.top_keywords,
            top_titles=self.settings.top_titles
        ).build(documents, labels)

        analysis_date = datetime.now()
        summary = SummaryGenerator().generate(clusters, len(documents), analysis_date)

        report_path = None
        if save_report:
            formatter = ReportFormatter(
                reports_dir=self.settings.reports_dir,
                date_format=self.settings.date_format
            )
            report_path = formatter.save_report(clusters, len(documents), analysis_date, quality)

        return PipelineResult(
            documents=documents,
            labels=labels,
            clusters=clusters,
            quality=quality,
            summary=summary,
            n_iter=clusterer.n_iter_,
            converged=clusterer.converged_,
            report_path=report_path,
            analysis_date=analysis_date
        )
