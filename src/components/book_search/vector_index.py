"""ベクトル類似検索のポートと実装（Numpyのインメモリ索引 / Supabase RPC）."""

import logging
import threading
from typing import Protocol

import numpy as np
from supabase import Client

from src.components.book_catalog.models import BookRecord
from src.components.book_catalog.store import CatalogStore
from src.components.book_search.embedding_client import EmbeddingClient
from src.components.book_search.models import SemanticHit

logger = logging.getLogger(__name__)


class VectorIndex(Protocol):
    """Embeddingを受け取り類似書籍を返すインターフェース.

    返り値は類似度降順、最大limit件、threshold未満を含まない.
    """

    def search(self, vector: list[float], threshold: float, limit: int) -> list[SemanticHit]:
        """類似検索を実行する."""
        ...


def build_vector_source(book: BookRecord) -> str:
    """書籍のEmbedding元テキストを組み立てる.

    Args:
        book: 書籍

    Returns:
        ``タイトル. Autor: ... . Verlag: ... . 説明`` 形式のテキスト
    """
    parts = [
        book.title or "Unbekannter Titel",
        f"Autor: {book.author}" if book.author else "",
        f"Fach: {book.subject}" if book.subject else "",
        f"Stufe: {book.level}" if book.level else "",
        f"Jahr: {book.year}" if book.year else "",
        f"Typ: {book.type}" if book.type else "",
        f"Verlag: {book.publisher}" if book.publisher else "",
        book.description or "",
    ]
    return ". ".join(part for part in parts if part)


class InMemoryVectorIndex:
    """書籍のEmbeddingをNumpy配列で保持するコサイン類似度索引.

    カタログを渡した場合は最初の検索時に全書籍を埋め込む. 埋め込みの失敗は
    検索の失敗として呼び出し元に伝わり、次の検索で再試行される.
    ヒットはidのみの部分射影で返すため、表示項目はハイドレーションで補う.
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        catalog_store: CatalogStore | None = None,
    ) -> None:
        """InMemoryVectorIndexを初期化する.

        Args:
            embedding_client: 書籍テキストのembedding生成クライアント
            catalog_store: 初回検索時に索引へ読み込むカタログ
        """
        self.embedding_client = embedding_client
        self.catalog_store = catalog_store
        self._ids: list[str] = []
        self._matrix = np.empty((0, 0))
        self._loaded = catalog_store is None
        self._lock = threading.Lock()

    def add_books(self, books: list[BookRecord]) -> None:
        """書籍を索引に追加する.

        Args:
            books: 追加する書籍のリスト
        """
        if not books:
            return
        vectors = np.array(
            self.embedding_client.embed_documents([build_vector_source(b) for b in books]),
        )
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        vectors = vectors / np.where(norms == 0, 1, norms)
        self._matrix = vectors if not self._ids else np.vstack([self._matrix, vectors])
        self._ids.extend(b.id for b in books)
        logger.info("Indexed %d books (total %d)", len(books), len(self._ids))

    def _ensure_loaded(self) -> None:
        """カタログの書籍をまだ読み込んでいなければ埋め込んで追加する."""
        if self._loaded:
            return
        with self._lock:
            if not self._loaded:
                self.add_books(self.catalog_store.list_all())
                self._loaded = True

    def __len__(self) -> int:
        return len(self._ids)

    def search(self, vector: list[float], threshold: float, limit: int) -> list[SemanticHit]:
        """コサイン類似度でthreshold以上の書籍を最大limit件返す.

        Args:
            vector: クエリのembedding
            threshold: 類似度の下限
            limit: 最大件数

        Returns:
            類似度降順のSemanticHitリスト

        Raises:
            EmbeddingProviderError: カタログの埋め込みに失敗した場合
        """
        self._ensure_loaded()
        if not self._ids:
            return []
        query = np.array(vector, dtype=float)
        norm = np.linalg.norm(query)
        if norm == 0:
            return []
        scores = np.clip(self._matrix @ (query / norm), 0.0, 1.0)
        # 同点は索引順を保つ
        order = np.argsort(-scores, kind="stable")
        hits = []
        for i in order[:limit]:
            if scores[i] < threshold:
                break
            hits.append(SemanticHit(book=BookRecord(id=self._ids[i]), similarity=float(scores[i])))
        return hits


class SupabaseVectorIndex:
    """Supabaseの類似検索RPC（``match_books``）を呼び出す索引クラス."""

    def __init__(self, client: Client, function_name: str = "match_books") -> None:
        """SupabaseVectorIndexを初期化する.

        Args:
            client: Supabaseクライアント
            function_name: 類似検索を行うSQL関数名
        """
        self.client = client
        self.function_name = function_name

    def search(self, vector: list[float], threshold: float, limit: int) -> list[SemanticHit]:
        """RPCで類似書籍を取得する."""
        response = self.client.rpc(
            self.function_name,
            {
                "query_embedding": vector,
                "match_threshold": threshold,
                "match_count": limit,
            },
        ).execute()
        hits = []
        for row in response.data or []:
            similarity = float(row.pop("similarity", 0.0))
            hits.append(SemanticHit(book=BookRecord.model_validate(row), similarity=similarity))
        return hits
