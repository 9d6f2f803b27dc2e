"""Модуль предобработки текста."""

from .text_cleaner import TextCleaner

__all__ = ["TextCleaner"]
