#!/usr/bin/env python3
"""
Главный скрипт кластеризации веб-страниц.

Использование:
    python run_clustering.py                          # Адреса и параметры из config.yaml
    python run_clustering.py --clusters 2 URL URL ... # Свои адреса
    python run_clustering.py --random                 # Случайные начальные центроиды
"""

import argparse
import sys
from pathlib import Path

from page_clusterer.analyzer.exceptions import ClusteringError
from page_clusterer.config import ConfigValidationError, load_settings
from page_clusterer.pipeline import ClusteringPipeline
from page_clusterer.utils import ensure_dir, get_logger, setup_logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Кластеризация веб-страниц методом k-means")
    parser.add_argument(
        "urls",
        nargs="*",
        help="Адреса страниц (по умолчанию: fetching.urls из конфигурации)"
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Путь к файлу конфигурации (по умолчанию: config.yaml)"
    )
    parser.add_argument(
        "--clusters",
        type=int,
        default=None,
        help="Число кластеров (по умолчанию: clustering.n_clusters)"
    )
    parser.add_argument(
        "--random",
        action="store_true",
        help="Случайный выбор начальных центроидов на каждый запуск"
    )
    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Не сохранять JSON-отчет"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Основная функция запуска кластеризации."""
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except FileNotFoundError as e:
        print(f"Ошибка конфигурации: {e}", file=sys.stderr)
        return 1
    except ConfigValidationError as e:
        print(str(e), file=sys.stderr)
        return 1

    ensure_dir(settings.logs_dir)
    logger = setup_logger(
        log_level=settings.log_level,
        log_dir=Path(settings.logs_dir),
        log_to_file=True
    )
    logger.info("=" * 60)
    logger.info("Запуск кластеризации страниц")
    logger.info("=" * 60)

    deterministic = False if args.random else None

    try:
        pipeline = ClusteringPipeline(settings)
        result = pipeline.run(
            urls=args.urls or None,
            n_clusters=args.clusters,
            deterministic=deterministic,
            save_report=not args.no_report
        )
    except ClusteringError as e:
        logger.error(f"Ошибка кластеризации: {e}")
        return 1
    except Exception as e:
        get_logger().exception(f"Критическая ошибка при выполнении кластеризации: {e}")
        return 1

    print(result.summary)

    logger.info("=" * 60)
    logger.info(f"Кластеризация завершена за {result.n_iter} итераций")
    if result.report_path:
        logger.info(f"Отчет сохранен: {result.report_path}")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
