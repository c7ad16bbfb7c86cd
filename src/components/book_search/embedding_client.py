"""LangChain Embeddingsモデルのラッパー."""

import logging
from numbers import Real

from langchain_core.embeddings import Embeddings

from src.components.book_search.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """LangChainのEmbeddingsモデルをラップするクライアントクラス."""

    def __init__(self, model: Embeddings) -> None:
        """EmbeddingClientを初期化する.

        Args:
            model: LangChainのEmbeddingsモデル
        """
        self.model = model

    def embed_query(self, text: str) -> list[float]:
        """クエリテキストのembeddingを生成する.

        Args:
            text: クエリテキスト

        Returns:
            embeddingベクトル

        Raises:
            EmbeddingProviderError: プロバイダ呼び出しの失敗、または応答が不正な場合
        """
        try:
            vector = self.model.embed_query(text)
        except Exception as e:
            logger.exception("Embedding request failed")
            msg = f"Embedding request failed: {e}"
            raise EmbeddingProviderError(msg) from e
        return _validate_vector(vector)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """複数ドキュメントのembeddingを生成する.

        Args:
            texts: ドキュメントテキストのリスト

        Returns:
            embeddingベクトルのリスト

        Raises:
            EmbeddingProviderError: プロバイダ呼び出しの失敗、または応答が不正な場合
        """
        try:
            vectors = self.model.embed_documents(texts)
        except Exception as e:
            logger.exception("Embedding request for documents failed")
            msg = f"Embedding request failed: {e}"
            raise EmbeddingProviderError(msg) from e
        if len(vectors) != len(texts):
            msg = f"Expected {len(texts)} embeddings, got {len(vectors)}"
            raise EmbeddingProviderError(msg)
        return [_validate_vector(vector) for vector in vectors]


def _validate_vector(vector: object) -> list[float]:
    """ベクトルが空でない数値リストであることを確認する."""
    if not isinstance(vector, list | tuple) or not vector:
        msg = "Embedding provider returned no vector"
        raise EmbeddingProviderError(msg)
    if not all(isinstance(v, Real) for v in vector):
        msg = "Embedding provider returned a malformed vector"
        raise EmbeddingProviderError(msg)
    return [float(v) for v in vector]
