"""カタログのフィールド部分一致によるキーワード検索."""

import logging

from src.common.config.settings import SearchConfig
from src.common.schema.lexicon import Lexicon
from src.components.book_catalog.models import (
    SEARCHABLE_FIELDS,
    BookRecord,
    FieldMatch,
    OrPredicate,
)
from src.components.book_catalog.store import CatalogStore
from src.components.book_search.classifier import NON_ALNUM_PATTERN, looks_like_isbn
from src.components.book_search.errors import KeywordSearchError

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 3


def extract_keywords(query: str, stopwords: set[str] | frozenset[str]) -> list[str]:
    """クエリを小文字化・空白分割し、短いトークンとストップワードを除く.

    Args:
        query: 生のクエリ
        stopwords: 除外する語の集合

    Returns:
        クエリ中の出現順のキーワードリスト
    """
    return [
        token
        for token in query.lower().split()
        if len(token) >= MIN_KEYWORD_LENGTH and token not in stopwords
    ]


class KeywordSearch:
    """キーワードをフィールド横断のOR条件にしてカタログを検索するクラス."""

    def __init__(self, catalog_store: CatalogStore, lexicon: Lexicon, config: SearchConfig) -> None:
        """KeywordSearchを初期化する.

        Args:
            catalog_store: 書籍カタログ
            lexicon: ストップワードを含む語彙
            config: 件数上限の設定
        """
        self.catalog_store = catalog_store
        self.stopwords = frozenset(lexicon.stopwords)
        self.config = config

    def build_predicate(self, query: str) -> OrPredicate:
        """クエリからOR条件を組み立てる.

        ISBNらしいクエリはisbnフィールドも対象にし、ハイフンを除いた形でも照合する.
        """
        keywords = extract_keywords(query, self.stopwords)
        is_isbn = looks_like_isbn(query.strip())
        fields = [*SEARCHABLE_FIELDS, "isbn"] if is_isbn else list(SEARCHABLE_FIELDS)
        clauses = [FieldMatch(field=field, value=token) for token in keywords for field in fields]
        if is_isbn:
            compact = NON_ALNUM_PATTERN.sub("", query)
            if compact not in keywords:
                clauses.append(FieldMatch(field="isbn", value=compact))
        return OrPredicate(clauses=clauses)

    def search(self, raw_query: str) -> list[BookRecord]:
        """キーワード検索を実行する.

        Args:
            raw_query: 展開前の生のクエリ

        Returns:
            一致した書籍のリスト. 有効なキーワードがなければ空リスト.

        Raises:
            KeywordSearchError: カタログの読み取りに失敗した場合
        """
        predicate = self.build_predicate(raw_query)
        if not predicate.clauses:
            logger.info("No keywords left after filtering: %r", raw_query)
            return []

        try:
            books = self.catalog_store.search_by_predicate(predicate, self.config.keyword_limit)
        except Exception as e:
            logger.exception("Keyword search failed")
            msg = f"Keyword search failed: {e}"
            raise KeywordSearchError(msg) from e

        logger.info("Keyword search returned %d books", len(books))
        return books
