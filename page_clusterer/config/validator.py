"""Валидация конфигурации."""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConfigValidationError(Exception):
    """Ошибка валидации конфигурации."""
    pass


def _is_env_ref(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("${")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Валидатор конфигурации с подробными проверками."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def validate_config(self, config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
        """
        Полная валидация конфигурации.

        Returns:
            (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        self._validate_fetching_config(config)
        self._validate_preprocessing_config(config)
        self._validate_vectorization_config(config)
        self._validate_clustering_config(config)
        self._validate_output_config(config)

        is_valid = len(self.errors) == 0
        return is_valid, self.errors.copy(), self.warnings.copy()

    def _validate_fetching_config(self, config: Dict[str, Any]):
        """Валидация конфигурации загрузки страниц."""
        fetching_config = config.get("fetching", {})

        urls = fetching_config.get("urls", [])
        if not isinstance(urls, list):
            self.errors.append("fetching.urls - должно быть списком адресов")
        else:
            if not urls:
                self.warnings.append("fetching.urls - список адресов пуст, их нужно передать в командной строке")
            for url in urls:
                if not isinstance(url, str) or not url.startswith(("http://", "https://")):
                    self.errors.append(f"fetching.urls - некорректный адрес: {url!r}")

        timeout = fetching_config.get("timeout", 10)
        if not _is_env_ref(timeout):
            try:
                timeout_ok = float(timeout) > 0
            except (TypeError, ValueError):
                timeout_ok = False
            if not timeout_ok:
                self.errors.append("fetching.timeout - должно быть положительным числом")

    def _validate_preprocessing_config(self, config: Dict[str, Any]):
        """Валидация конфигурации предобработки."""
        preprocessing_config = config.get("preprocessing", {})

        min_len = preprocessing_config.get("min_word_length", 1)
        max_len = preprocessing_config.get("max_word_length")

        if not _is_positive_int(min_len):
            self.errors.append("preprocessing.min_word_length - должно быть положительным целым числом")

        if max_len is not None:
            if not _is_positive_int(max_len):
                self.errors.append("preprocessing.max_word_length - должно быть положительным целым числом")
            elif _is_positive_int(min_len) and min_len > max_len:
                self.errors.append("preprocessing.min_word_length не должно превышать max_word_length")

        stopwords = preprocessing_config.get("stopwords_extra", [])
        if not isinstance(stopwords, list):
            self.errors.append("preprocessing.stopwords_extra - должно быть списком")

    def _validate_vectorization_config(self, config: Dict[str, Any]):
        """Валидация конфигурации векторизации."""
        vectorization_config = config.get("vectorization", {})

        n_features = vectorization_config.get("n_features", 2 ** 16)
        if not _is_positive_int(n_features):
            self.errors.append("vectorization.n_features - должно быть положительным целым числом")
        elif n_features < 1024:
            self.warnings.append("vectorization.n_features - малая размерность увеличивает число коллизий хеша")
        elif n_features > 2 ** 20:
            self.warnings.append("vectorization.n_features - плотная матрица такой ширины займет много памяти")

    def _validate_clustering_config(self, config: Dict[str, Any]):
        """Валидация конфигурации кластеризации."""
        clustering_config = config.get("clustering", {})

        n_clusters = clustering_config.get("n_clusters", 3)
        if not _is_positive_int(n_clusters):
            self.errors.append("clustering.n_clusters - должно быть положительным целым числом")
        else:
            urls = config.get("fetching", {}).get("urls", [])
            if isinstance(urls, list) and urls and n_clusters > len(urls):
                self.errors.append(
                    f"clustering.n_clusters ({n_clusters}) превышает количество страниц ({len(urls)})"
                )

        deterministic = clustering_config.get("deterministic", True)
        if not isinstance(deterministic, bool):
            self.errors.append("clustering.deterministic - должно быть true или false")

        max_iter = clustering_config.get("max_iter")
        if max_iter is None:
            self.warnings.append("clustering.max_iter не задан - число итераций k-means не ограничено")
        elif not _is_positive_int(max_iter):
            self.errors.append("clustering.max_iter - должно быть положительным целым числом")

        n_jobs = clustering_config.get("n_jobs", 1)
        if not _is_positive_int(n_jobs):
            self.errors.append("clustering.n_jobs - должно быть положительным целым числом")

    def _validate_output_config(self, config: Dict[str, Any]):
        """Валидация конфигурации вывода."""
        output_config = config.get("output", {})

        for dir_name in ("reports_dir", "logs_dir"):
            dir_path = output_config.get(dir_name)
            if dir_path is not None and not isinstance(dir_path, str):
                self.errors.append(f"output.{dir_name} - некорректный путь к директории")

        top_titles = output_config.get("top_titles")
        if top_titles is not None and not _is_positive_int(top_titles):
            self.errors.append("output.top_titles - должно быть положительным целым числом или null")

    def get_validation_report(self) -> str:
        """Получить отчет о валидации."""
        report_lines = ["Конфигурация валидации - Отчет"]

        if self.errors:
            report_lines.append(f"\nОшибки ({len(self.errors)}):")
            for error in self.errors:
                report_lines.append(f"  - {error}")

        if self.warnings:
            report_lines.append(f"\nПредупреждения ({len(self.warnings)}):")
            for warning in self.warnings:
                report_lines.append(f"  - {warning}")

        if not self.errors and not self.warnings:
            report_lines.append("\nКонфигурация валидна, без предупреждений")

        return "\n".join(report_lines)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
    """Валидирует словарь конфигурации."""
    return ConfigValidator().validate_config(config)


def validate_config_file(config_path: Union[str, Path] = "config.yaml") -> Tuple[bool, List[str], List[str]]:
    """
    Загружает и валидирует файл конфигурации.

    Returns:
        (is_valid, errors, warnings)
    """
    config_file = Path(config_path)
    if not config_file.exists():
        return False, [f"Файл конфигурации {config_path} не найден"], []

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Ошибка разбора {config_path}: {e}")
        return False, ["Ошибка загрузки конфигурации"], []

    return validate_config(config)
