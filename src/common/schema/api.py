"""APIリクエスト/レスポンススキーマ."""

from typing import Literal

from pydantic import BaseModel

from src.components.book_search.models import ScoredResult, SearchDebug


class SearchRequest(BaseModel):
    """書籍検索リクエスト."""

    query: str


class SearchResponse(BaseModel):
    """書籍検索レスポンス."""

    results: list[ScoredResult]
    debug: SearchDebug
    status: Literal["ok", "degraded", "failed"]
