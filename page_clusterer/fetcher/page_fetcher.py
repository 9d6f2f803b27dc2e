"""Загрузка веб-страниц и извлечение текста."""

import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import unquote, urlparse

import requests
from bs4 import BeautifulSoup

from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "page-clusterer/0.1"


class FetchError(Exception):
    """Не удалось загрузить страницу."""
    pass


@dataclass
class Document:
    """Загруженная страница."""
    url: str
    title: str
    text: str
    tokens: List[str] = field(default_factory=list)


def title_from_url(url: str) -> str:
    """
    Строит заголовок документа из последнего сегмента пути URL.

    Args:
        url: Адрес страницы

    Returns:
        Заголовок, например "Golden Retriever" для .../wiki/Golden_Retriever
    """
    path = urlparse(url).path.rstrip("/")
    segment = path.rsplit("/", 1)[-1] if path else ""
    title = unquote(segment).replace("_", " ").strip()
    return title or url


def strip_references(text: str, marker: Optional[str] = "References") -> str:
    """
    Отрезает раздел ссылок.

    На страницах Википедии маркер встречается дважды: в оглавлении и в
    заголовке раздела. Сохраняется текст до второго вхождения, первое
    вхождение удаляется.

    Args:
        text: Текст страницы
        marker: Заголовок раздела ссылок (None - не обрезать)

    Returns:
        Текст без раздела ссылок
    """
    if not marker:
        return text
    parts = text.split(marker)
    if len(parts) < 2:
        return text
    return parts[0] + parts[1]


class PageFetcher:
    """Класс для загрузки страниц по HTTP."""

    def __init__(
        self,
        timeout: float = 10,
        user_agent: str = DEFAULT_USER_AGENT,
        reference_marker: Optional[str] = "References",
        session: Optional[requests.Session] = None
    ):
        """
        Инициализация fetcher.

        Args:
            timeout: Таймаут HTTP-запроса в секундах
            user_agent: Заголовок User-Agent
            reference_marker: Заголовок раздела ссылок, который нужно отрезать
            session: Сессия requests (по умолчанию создается новая)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.reference_marker = reference_marker
        self.session = session or requests.Session()

    def fetch_html(self, url: str) -> str:
        """Загружает HTML страницы."""
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Не удалось загрузить {url}: {e}") from e
        return response.text

    def extract_text(self, html: str) -> str:
        """Извлекает видимый текст тела страницы."""
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(["script", "style", "noscript"]):
            tag.decompose()
        root = soup.body if soup.body is not None else soup
        text = root.get_text(separator=" ")
        return re.sub(r"\s+", " ", text).strip()

    def fetch_document(self, url: str) -> Document:
        """
        Загружает страницу и возвращает документ с текстом.

        Args:
            url: Адрес страницы

        Returns:
            Document
        """
        logger.debug(f"Загрузка {url}")
        html = self.fetch_html(url)
        text = strip_references(self.extract_text(html), self.reference_marker)
        return Document(url=url, title=title_from_url(url), text=text)

    def fetch_all(self, urls: List[str]) -> List[Document]:
        """
        Загружает все страницы, пропуская недоступные.

        Args:
            urls: Адреса страниц

        Returns:
            Список загруженных документов
        """
        logger.info(f"Загрузка {len(urls)} страниц...")

        documents = []
        for url in urls:
            try:
                documents.append(self.fetch_document(url))
            except FetchError as e:
                logger.error(str(e))

        if not documents:
            logger.warning("Не загружено ни одной страницы")
        else:
            logger.info(f"Успешно загружено {len(documents)} из {len(urls)} страниц")

        return documents
