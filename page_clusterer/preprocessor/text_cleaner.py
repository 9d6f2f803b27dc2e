"""Нормализация и токенизация текста страниц."""

import re
from typing import List, Optional

from nltk.corpus import stopwords
from nltk.tokenize import word_tokenize

from ..utils.logger import get_logger

logger = get_logger(__name__)

_CONTRACTIONS = [
    ("n't", " not"),
    ("'re", " are"),
    ("'m", " am"),
    ("'ll", " will"),
    ("'ve", " have"),
]


def _load_english_stopwords() -> set:
    try:
        return set(stopwords.words("english"))
    except LookupError:
        logger.warning("NLTK английские стоп-слова не найдены. Запустите: python setup_nltk.py")
        return set()


class TextCleaner:
    """Класс для очистки и токенизации текста."""

    def __init__(
        self,
        stopwords_extra: List[str] = None,
        min_word_length: int = 1,
        max_word_length: Optional[int] = None,
        remove_stopwords: bool = False
    ):
        """
        Инициализация очистителя текста.

        Args:
            stopwords_extra: Дополнительные стоп-слова
            min_word_length: Минимальная длина слова
            max_word_length: Максимальная длина слова (None - без ограничения)
            remove_stopwords: Удалять ли английские стоп-слова NLTK
        """
        self.stopwords_extra = stopwords_extra or []
        self.stopwords = _load_english_stopwords() if remove_stopwords else set()
        self.stopwords.update(word.lower() for word in self.stopwords_extra)

        self.min_word_length = min_word_length
        self.max_word_length = max_word_length
        self.remove_stopwords = remove_stopwords
        self._punkt_missing_logged = False

    def normalize(self, text: str) -> str:
        """
        Раскрывает сокращения, оставляет только латинские буквы, приводит к нижнему регистру.

        Args:
            text: Исходный текст

        Returns:
            Нормализованный текст
        """
        if not text:
            return ""

        for contraction, expansion in _CONTRACTIONS:
            text = text.replace(contraction, expansion)

        text = re.sub(r"[^a-zA-Z\s]", "", text)
        return text.lower()

    def tokenize(self, text: str) -> List[str]:
        """
        Токенизирует текст и фильтрует токены.

        Args:
            text: Нормализованный текст

        Returns:
            Список токенов
        """
        if not text or not text.strip():
            return []

        try:
            tokens = word_tokenize(text, language="english")
        except LookupError:
            if not self._punkt_missing_logged:
                logger.warning("NLTK punkt не найден, используется разбиение по пробелам. Запустите: python setup_nltk.py")
                self._punkt_missing_logged = True
            tokens = text.split()

        filtered_tokens = []
        for token in tokens:
            if len(token) < self.min_word_length:
                continue
            if self.max_word_length is not None and len(token) > self.max_word_length:
                continue
            if token in self.stopwords:
                continue
            filtered_tokens.append(token)

        return filtered_tokens

    def preprocess(self, text: str) -> List[str]:
        """
        Полная предобработка: нормализация + токенизация.

        Args:
            text: Исходный текст

        Returns:
            Список токенов
        """
        return self.tokenize(self.normalize(text))
