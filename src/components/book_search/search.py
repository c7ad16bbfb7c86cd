"""意味検索とキーワード検索を組み合わせた書籍ハイブリッド検索エンジン."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from typing import TypeVar

from src.common.config.settings import SearchConfig
from src.components.book_catalog.models import BookRecord
from src.components.book_search.classifier import QueryClassifier
from src.components.book_search.errors import (
    BothBranchesFailed,
    InvalidQuery,
    SearchBranchError,
)
from src.components.book_search.expander import QueryExpander
from src.components.book_search.keyword import KeywordSearch
from src.components.book_search.merger import ResultMerger
from src.components.book_search.models import (
    BranchFailure,
    SearchDebug,
    SearchOutcome,
    SemanticHit,
)
from src.components.book_search.semantic import SemanticSearch

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HybridBookSearch:
    """書籍ハイブリッド検索エンジンクラス.

    クエリを分類・展開し、意味検索とキーワード検索を独立したブランチとして実行して
    その結果を統合する. 片方のブランチが失敗しても、もう片方の結果で検索を続ける.
    """

    def __init__(
        self,
        classifier: QueryClassifier,
        expander: QueryExpander,
        semantic_search: SemanticSearch,
        keyword_search: KeywordSearch,
        merger: ResultMerger,
        config: SearchConfig,
    ) -> None:
        """HybridBookSearchを初期化する.

        Args:
            classifier: クエリ分類器
            expander: クエリ展開器
            semantic_search: 意味検索ブランチ
            keyword_search: キーワード検索ブランチ
            merger: 結果のマージャー
            config: 並列実行と失敗時の挙動の設定
        """
        self.classifier = classifier
        self.expander = expander
        self.semantic_search = semantic_search
        self.keyword_search = keyword_search
        self.merger = merger
        self.config = config

    def search(self, raw_query: str) -> SearchOutcome:
        """ハイブリッド検索を実行する.

        Args:
            raw_query: 利用者が入力したクエリ

        Returns:
            統合スコア降順の結果と診断情報

        Raises:
            InvalidQuery: クエリが空または空白のみの場合
            BothBranchesFailed: 両ブランチが失敗し、raise_on_total_failureが有効な場合
        """
        if not raw_query or not raw_query.strip():
            msg = "Search query must not be empty"
            raise InvalidQuery(msg)

        query = raw_query.strip()
        classification = self.classifier.classify(query)
        expanded_query = self.expander.expand(query, classification)
        threshold = self.semantic_search.threshold_for(query)

        semantic_hits, keyword_hits, errors = self._run_branches(query, expanded_query)

        if len(errors) == 2 and self.config.raise_on_total_failure:
            raise BothBranchesFailed(errors)

        results = self.merger.merge(semantic_hits, keyword_hits, query)

        if not errors:
            status = "ok"
        elif len(errors) == 1:
            status = "degraded"
        else:
            status = "failed"
            logger.error("Both search branches failed for query %r", query)

        logger.info(
            "Search %r: %d semantic, %d keyword, %d results (%s)",
            query,
            len(semantic_hits),
            len(keyword_hits),
            len(results),
            status,
        )
        return SearchOutcome(
            results=results,
            status=status,
            debug=SearchDebug(
                original_query=query,
                expanded_query=expanded_query,
                semantic_count=len(semantic_hits),
                keyword_count=len(keyword_hits),
                threshold=threshold,
                timestamp=datetime.now(tz=UTC),
                errors=[
                    BranchFailure(branch=e.branch, error=type(e).__name__, message=str(e))
                    for e in errors
                ],
            ),
        )

    def _run_branches(
        self,
        query: str,
        expanded_query: str,
    ) -> tuple[list[SemanticHit], list[BookRecord], list[SearchBranchError]]:
        """2つの検索ブランチを実行し、それぞれの結果と失敗を返す."""

        def semantic() -> list[SemanticHit]:
            return self.semantic_search.search(expanded_query, query)

        def keyword() -> list[BookRecord]:
            return self.keyword_search.search(query)

        if self.config.parallel:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="book-search") as pool:
                semantic_future = pool.submit(_guarded, semantic)
                keyword_future = pool.submit(_guarded, keyword)
                semantic_hits, semantic_error = semantic_future.result()
                keyword_hits, keyword_error = keyword_future.result()
        else:
            semantic_hits, semantic_error = _guarded(semantic)
            keyword_hits, keyword_error = _guarded(keyword)

        errors = [e for e in (semantic_error, keyword_error) if e is not None]
        return semantic_hits, keyword_hits, errors


def _guarded(branch: Callable[[], list[T]]) -> tuple[list[T], SearchBranchError | None]:
    """ブランチを実行し、ブランチ内の失敗を結果として返す."""
    try:
        return branch(), None
    except SearchBranchError as e:
        logger.warning("%s branch failed: %s", e.branch, e)
        return [], e
