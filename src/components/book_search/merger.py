"""意味検索とキーワード検索の結果を統合・重複排除するマージャー."""

import logging

from src.components.book_catalog.models import BookRecord, coerce_has_pdf
from src.components.book_search.models import ScoredResult, SemanticHit
from src.components.book_search.scorer import RelevanceScorer

logger = logging.getLogger(__name__)


class ResultMerger:
    """2つの結果集合を書籍IDで統合し、統合スコア降順に並べるクラス."""

    def __init__(self, scorer: RelevanceScorer, keyword_baseline: float = 0.5) -> None:
        """ResultMergerを初期化する.

        Args:
            scorer: キーワード関連度スコアラー
            keyword_baseline: 意味検索の根拠がない書籍に与える基礎スコア
        """
        self.scorer = scorer
        self.keyword_baseline = keyword_baseline

    def merge(
        self,
        semantic_hits: list[SemanticHit],
        keyword_hits: list[BookRecord],
        raw_query: str,
    ) -> list[ScoredResult]:
        """結果を統合する.

        同じIDは先に登録した方（意味検索側）を採用する. 統合スコアは
        類似度（またはkeyword_baseline）とキーワードスコアの単純な和で、上限は設けない.

        Args:
            semantic_hits: 意味検索のヒット
            keyword_hits: キーワード検索のヒット
            raw_query: 展開前の生のクエリ

        Returns:
            統合スコア降順のScoredResultリスト. 同点は登録順.
        """
        keywords = self.scorer.important_keywords(raw_query)
        merged: dict[str, ScoredResult] = {}

        for hit in semantic_hits:
            if hit.book.id in merged:
                continue
            keyword_score = self.scorer.score(hit.book, keywords)
            merged[hit.book.id] = _scored(
                hit.book,
                similarity=hit.similarity + keyword_score,
                original_similarity=hit.similarity,
                keyword_score=keyword_score,
            )

        for book in keyword_hits:
            if book.id in merged:
                continue
            keyword_score = self.scorer.score(book, keywords)
            merged[book.id] = _scored(
                book,
                similarity=self.keyword_baseline + keyword_score,
                original_similarity=None,
                keyword_score=keyword_score,
            )

        logger.debug(
            "Merged %d semantic and %d keyword hits into %d results",
            len(semantic_hits),
            len(keyword_hits),
            len(merged),
        )
        return sorted(merged.values(), key=lambda r: r.similarity, reverse=True)


def _scored(
    book: BookRecord,
    similarity: float,
    original_similarity: float | None,
    keyword_score: float,
) -> ScoredResult:
    """BookRecordにスコアを付けてScoredResultを生成する."""
    data = book.model_dump()
    data["has_pdf"] = coerce_has_pdf(book.has_pdf)
    return ScoredResult(
        **data,
        similarity=similarity,
        original_similarity=original_similarity,
        keyword_score=keyword_score,
    )
