"""書籍ハイブリッド検索用のモデル定義."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from src.components.book_catalog.models import BookRecord


class QueryClassification(BaseModel):
    """クエリの分類結果を表すモデル."""

    model_config = ConfigDict(frozen=True)

    text: str
    token_count: int
    looks_like_isbn: bool
    is_short: bool
    looks_like_publisher: bool


class WeightedKeyword(BaseModel):
    """スコアリングに用いる重み付きキーワード."""

    model_config = ConfigDict(frozen=True)

    word: str
    weight: float


class SemanticHit(BaseModel):
    """ベクトル類似検索の1件分のヒット.

    bookは類似検索側の部分射影で、id以外が欠けていることがある.
    """

    book: BookRecord
    similarity: float


class ScoredResult(BookRecord):
    """統合スコア付きの検索結果を表すモデル.

    similarityは意味類似度ではなく、キーワードスコアを加算した統合スコア.
    """

    model_config = ConfigDict(frozen=True)

    has_pdf: bool = False
    similarity: float
    original_similarity: float | None = None
    keyword_score: float = 0.0


class BranchFailure(BaseModel):
    """失敗した検索ブランチの診断情報."""

    branch: str
    error: str
    message: str


class SearchDebug(BaseModel):
    """検索実行の診断情報."""

    original_query: str
    expanded_query: str
    semantic_count: int
    keyword_count: int
    threshold: float
    timestamp: datetime
    errors: list[BranchFailure] = []


class SearchOutcome(BaseModel):
    """検索結果と診断情報をまとめたモデル.

    statusは両ブランチ成功で"ok"、片方失敗で"degraded"、両方失敗で"failed".
    """

    results: list[ScoredResult]
    debug: SearchDebug
    status: Literal["ok", "degraded", "failed"] = "ok"
