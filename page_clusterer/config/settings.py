"""Загрузка и управление конфигурацией из .env и config.yaml."""

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from .validator import ConfigValidationError, ConfigValidator


class Settings:
    """Класс для хранения настроек приложения."""

    def __init__(self, config_dict: Dict[str, Any]):
        """Инициализация настроек из словаря конфигурации."""
        # Загрузка страниц
        fetch_config = config_dict.get("fetching", {})
        self.urls = list(fetch_config.get("urls", []))
        self.fetch_timeout = float(fetch_config.get("timeout", 10))
        self.user_agent = fetch_config.get("user_agent", "page-clusterer/0.1")
        self.reference_marker = fetch_config.get("reference_marker", "References")

        # Предобработка
        preproc_config = config_dict.get("preprocessing", {})
        self.stopwords_extra = preproc_config.get("stopwords_extra", [])
        self.min_word_length = preproc_config.get("min_word_length", 1)
        self.max_word_length = preproc_config.get("max_word_length")
        self.remove_stopwords = preproc_config.get("remove_stopwords", False)

        # Векторизация
        vec_config = config_dict.get("vectorization", {})
        self.n_features = vec_config.get("n_features", 2 ** 16)

        # Кластеризация
        cluster_config = config_dict.get("clustering", {})
        self.n_clusters = cluster_config.get("n_clusters", 3)
        self.deterministic = cluster_config.get("deterministic", True)
        self.max_iter = cluster_config.get("max_iter")
        self.n_jobs = cluster_config.get("n_jobs", 1)

        # Вывод
        output_config = config_dict.get("output", {})
        self.reports_dir = Path(output_config.get("reports_dir", "./storage/reports"))
        self.logs_dir = Path(output_config.get("logs_dir", "./storage/logs"))
        self.date_format = output_config.get("date_format", "%Y-%m-%d_%H%M%S")
        self.top_keywords = output_config.get("top_keywords", 10)
        self.top_titles = output_config.get("top_titles")

        # Логирование
        self.log_level = os.getenv("LOG_LEVEL", "INFO")


def load_settings(config_path: str = "config.yaml", validate: bool = True) -> Settings:
    """
    Загружает конфигурацию из .env и config.yaml.

    Args:
        config_path: Путь к файлу config.yaml
        validate: Проверять ли конфигурацию перед созданием настроек

    Returns:
        Settings: Объект с настройками
    """
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(
            f"Файл конфигурации {config_path} не найден. "
            f"Скопируйте config.yaml.example в config.yaml и настройте его."
        )

    with open(config_file, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    config_dict = _substitute_env_vars(config_dict)

    if validate:
        validator = ConfigValidator()
        is_valid, errors, _ = validator.validate_config(config_dict)
        if not is_valid:
            raise ConfigValidationError(validator.get_validation_report())

    return Settings(config_dict)


def _substitute_env_vars(obj: Any) -> Any:
    """Рекурсивно заменяет переменные окружения в конфигурации."""
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_substitute_env_vars(item) for item in obj]
    elif isinstance(obj, str) and obj.startswith("${") and obj.endswith("}"):
        env_var = obj[2:-1]
        return os.getenv(env_var, "")
    return obj
