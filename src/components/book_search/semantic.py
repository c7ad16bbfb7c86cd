"""Embeddingとベクトル索引による意味検索、および検索結果のハイドレーション."""

import logging

from src.common.config.settings import SearchConfig
from src.components.book_catalog.store import CatalogStore
from src.components.book_search.classifier import SHORT_QUERY_TOKENS, count_tokens
from src.components.book_search.embedding_client import EmbeddingClient
from src.components.book_search.errors import SimilaritySearchError
from src.components.book_search.models import SemanticHit
from src.components.book_search.vector_index import VectorIndex

logger = logging.getLogger(__name__)


class ResultHydrator:
    """部分射影のヒットをカタログの完全なレコードで置き換えるクラス."""

    def __init__(self, catalog_store: CatalogStore) -> None:
        """ResultHydratorを初期化する.

        Args:
            catalog_store: 書籍カタログ
        """
        self.catalog_store = catalog_store

    def hydrate(self, hits: list[SemanticHit]) -> list[SemanticHit]:
        """表示項目が欠けたヒットをIDで再取得し、類似度を付け直す.

        取得に失敗したヒットは部分データのまま残す. 失敗は呼び出し元に伝播しない.

        Args:
            hits: 類似検索のヒット

        Returns:
            入力と同じ順序のヒット
        """
        partial_ids = [hit.book.id for hit in hits if hit.book.is_partial()]
        if not partial_ids:
            return hits

        try:
            fetched = {book.id: book for book in self.catalog_store.get_by_ids(partial_ids)}
        except Exception:
            logger.warning(
                "Hydration failed for %d hits; keeping partial records",
                len(partial_ids),
                exc_info=True,
            )
            return hits

        missing = [book_id for book_id in partial_ids if book_id not in fetched]
        if missing:
            logger.warning("Hydration found no catalog record for ids: %s", missing)

        return [
            SemanticHit(book=fetched[hit.book.id], similarity=hit.similarity)
            if hit.book.id in fetched
            else hit
            for hit in hits
        ]


class SemanticSearch:
    """展開済みクエリのembeddingで類似書籍を検索するクラス."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_index: VectorIndex,
        hydrator: ResultHydrator,
        config: SearchConfig,
    ) -> None:
        """SemanticSearchを初期化する.

        Args:
            embedding_client: embedding生成クライアント
            vector_index: ベクトル類似検索の索引
            hydrator: 部分射影のハイドレーター
            config: 閾値と件数上限の設定
        """
        self.embedding_client = embedding_client
        self.vector_index = vector_index
        self.hydrator = hydrator
        self.config = config

    def threshold_for(self, original_query: str) -> float:
        """元クエリのトークン数から類似度閾値を決める.

        短いクエリはembeddingが不安定なため低い閾値を使う.
        """
        if count_tokens(original_query) <= SHORT_QUERY_TOKENS:
            return self.config.short_query_threshold
        return self.config.default_threshold

    def search(self, expanded_query: str, original_query: str) -> list[SemanticHit]:
        """意味検索を実行する.

        Args:
            expanded_query: embeddingに使う展開済みクエリ
            original_query: 閾値判定に使う元のクエリ

        Returns:
            索引が返した順序のSemanticHitリスト

        Raises:
            EmbeddingProviderError: embedding生成に失敗した場合
            SimilaritySearchError: 類似検索に失敗した場合
        """
        vector = self.embedding_client.embed_query(expanded_query)
        threshold = self.threshold_for(original_query)

        try:
            hits = self.vector_index.search(vector, threshold, self.config.semantic_limit)
        except Exception as e:
            logger.exception("Similarity search failed")
            msg = f"Similarity search failed: {e}"
            raise SimilaritySearchError(msg) from e

        logger.info("Semantic search returned %d hits (threshold=%.2f)", len(hits), threshold)
        return self.hydrator.hydrate(hits)
