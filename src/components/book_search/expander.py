"""Embedding用にクエリを書き換える展開器."""

import logging
import random
from collections.abc import Callable, Sequence

from src.common.schema.lexicon import Lexicon
from src.components.book_search.models import QueryClassification

logger = logging.getLogger(__name__)

Selector = Callable[[Sequence[str]], str]


class QueryExpander:
    """短いクエリと出版社クエリを、Embeddingの再現率が上がる形に書き換える.

    展開結果はEmbeddingにのみ使い、キーワード検索には使わない.
    """

    def __init__(self, lexicon: Lexicon, selector: Selector = random.choice) -> None:
        """QueryExpanderを初期化する.

        Args:
            lexicon: 接頭辞プールと出版社接頭辞を含む語彙
            selector: 接頭辞プールから1つ選ぶ関数. テストでは固定の関数を渡す.
        """
        self.lexicon = lexicon
        self.selector = selector

    def expand(self, query: str, classification: QueryClassification) -> str:
        """分類結果に従ってクエリを展開する.

        Args:
            query: トリム済みのクエリ
            classification: クエリの分類結果

        Returns:
            展開後のクエリ. 展開不要の場合は入力をそのまま返す.
        """
        if classification.looks_like_publisher:
            expanded = f"{self.lexicon.publisher_prefix} {query}"
        elif classification.is_short:
            prefix = self.selector(self.lexicon.expansion_prefixes)
            expanded = f"{prefix} {query}"
        else:
            return query
        logger.debug("Expanded query %r -> %r", query, expanded)
        return expanded
