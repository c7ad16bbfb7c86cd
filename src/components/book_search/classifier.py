"""クエリの形状（ISBN・出版社名・短いクエリ）を判定する分類器."""

import re

from src.common.schema.lexicon import Lexicon
from src.components.book_search.models import QueryClassification

ISBN_PATTERN = re.compile(r"^[\d-]+$")
NON_ALNUM_PATTERN = re.compile(r"[^0-9A-Za-z]")
MIN_ISBN_LENGTH = 5
SHORT_QUERY_TOKENS = 2


def count_tokens(query: str) -> int:
    """空白区切りのトークン数を返す."""
    return len(query.split())


def looks_like_isbn(query: str) -> bool:
    """数字とハイフンのみで構成され、英数字が5文字以上ならISBNとみなす.

    Args:
        query: トリム済みのクエリ

    Returns:
        ISBNらしい場合True
    """
    normalized = NON_ALNUM_PATTERN.sub("", query)
    return bool(ISBN_PATTERN.match(query)) and len(normalized) >= MIN_ISBN_LENGTH


class QueryClassifier:
    """クエリを分類するクラス."""

    def __init__(self, lexicon: Lexicon) -> None:
        """QueryClassifierを初期化する.

        Args:
            lexicon: 出版社指標語と既知の出版社名を含む語彙
        """
        self.lexicon = lexicon

    def classify(self, query: str) -> QueryClassification:
        """クエリを分類する. 空文字列を含め、例外は送出しない.

        Args:
            query: 生のクエリ

        Returns:
            分類結果
        """
        text = query.strip()
        token_count = count_tokens(text)
        return QueryClassification(
            text=text,
            token_count=token_count,
            looks_like_isbn=looks_like_isbn(text),
            is_short=token_count <= SHORT_QUERY_TOKENS,
            looks_like_publisher=self.mentions_publisher(text),
        )

    def mentions_publisher(self, query: str) -> bool:
        """出版社指標語または既知の出版社名を含むかを判定する."""
        lowered = query.lower()
        return any(term in lowered for term in self.lexicon.strong_terms)
