#!/usr/bin/env python3
"""
Скрипт для загрузки необходимых данных NLTK.

Запустите этот скрипт перед первым использованием:
    python setup_nltk.py
"""

import os
import sys

import nltk

# punkt_tab нужен новым версиям NLTK, punkt - старым
PACKAGES = ["punkt", "punkt_tab", "stopwords"]


def main():
    """Загружает необходимые данные NLTK."""
    print("Загрузка данных NLTK...")

    nltk_data_dir = os.getenv("NLTK_DATA")
    if nltk_data_dir:
        os.makedirs(nltk_data_dir, exist_ok=True)

    failed = []
    for package in PACKAGES:
        print(f"Загрузка {package}...")
        if not nltk.download(package, quiet=True, download_dir=nltk_data_dir):
            failed.append(package)

    if failed:
        print(f"Не удалось загрузить: {', '.join(failed)}", file=sys.stderr)
        sys.exit(1)

    print("Все необходимые данные NLTK загружены")
    if nltk_data_dir:
        print(f"Данные сохранены в: {nltk_data_dir}")


if __name__ == "__main__":
    main()
