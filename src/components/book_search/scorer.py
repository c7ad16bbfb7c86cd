"""フィールド重み付きのキーワード関連度スコアラー.

スコアは書籍を返した検索ブランチに依存せず、元クエリのキーワードだけから計算する.
キーワードごとの加点（重みwに対する倍率）:

- 連結テキストに語境界で一致: 0.4 / 部分一致のみ: 0.2
- タイトルに含まれる: 0.3
- 主題（subject）に含まれる: 0.2
- 出版社に語境界で一致: 1.0 / 部分一致のみ: 0.6
- 種別（type）に含まれる: 0.2

合計を重みの総和で割り、最後に0.8倍する.
"""

import re

from src.common.schema.lexicon import Lexicon
from src.components.book_catalog.models import BookRecord
from src.components.book_search.keyword import extract_keywords
from src.components.book_search.models import WeightedKeyword

STRONG_WEIGHT = 2.0
TYPE_WEIGHT = 1.5
DEFAULT_WEIGHT = 1.0

TEXT_EXACT = 0.4
TEXT_PARTIAL = 0.2
TITLE_MATCH = 0.3
SUBJECT_MATCH = 0.2
PUBLISHER_EXACT = 1.0
PUBLISHER_PARTIAL = 0.6
TYPE_MATCH = 0.2


def _overlaps(word: str, terms: list[str]) -> bool:
    """どちらか一方が他方を部分文字列として含む語があればTrue."""
    return any(word in term or term in word for term in terms)


def _word_match(word: str, text: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", text) is not None


class RelevanceScorer:
    """書籍とクエリキーワードの関連度を計算するクラス."""

    def __init__(self, lexicon: Lexicon, scale: float = 0.8) -> None:
        """RelevanceScorerを初期化する.

        Args:
            lexicon: 強い語と種別語を含む語彙
            scale: 正規化後に掛ける係数
        """
        self.lexicon = lexicon
        self.scale = scale
        self.stopwords = frozenset(lexicon.stopwords)

    def important_keywords(self, raw_query: str) -> list[WeightedKeyword]:
        """元クエリから重み付きキーワードを導出する.

        Args:
            raw_query: 展開前の生のクエリ

        Returns:
            キーワードと重みのリスト
        """
        keywords = []
        for word in extract_keywords(raw_query, self.stopwords):
            if _overlaps(word, self.lexicon.strong_terms):
                weight = STRONG_WEIGHT
            elif _overlaps(word, self.lexicon.catalog_type_terms):
                weight = TYPE_WEIGHT
            else:
                weight = DEFAULT_WEIGHT
            keywords.append(WeightedKeyword(word=word, weight=weight))
        return keywords

    def score(self, book: BookRecord, keywords: list[WeightedKeyword]) -> float:
        """書籍のキーワードスコアを計算する.

        Args:
            book: 採点対象の書籍
            keywords: important_keywordsで導出したキーワード

        Returns:
            正規化済みスコア. キーワードがなければ0.0.
        """
        total_weight = sum(k.weight for k in keywords)
        if total_weight == 0:
            return 0.0

        text = book.searchable_text
        title = book.field_text("title")
        subject = book.field_text("subject")
        publisher = book.field_text("publisher")
        book_type = book.field_text("type")

        total = 0.0
        for keyword in keywords:
            word, weight = keyword.word, keyword.weight
            if _word_match(word, text):
                total += weight * TEXT_EXACT
            elif word in text:
                total += weight * TEXT_PARTIAL
            if word in title:
                total += weight * TITLE_MATCH
            if word in subject:
                total += weight * SUBJECT_MATCH
            if _word_match(word, publisher):
                total += weight * PUBLISHER_EXACT
            elif word in publisher:
                total += weight * PUBLISHER_PARTIAL
            if word in book_type:
                total += weight * TYPE_MATCH

        return total / total_weight * self.scale
