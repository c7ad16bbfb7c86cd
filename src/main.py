"""FastAPIアプリケーションのエントリポイント."""

from fastapi import FastAPI, HTTPException

from src.common.config.settings import load_config
from src.common.di.container import Container
from src.common.schema.api import SearchRequest, SearchResponse
from src.components.book_search.errors import InvalidQuery


def create_app() -> FastAPI:
    """FastAPIアプリケーションを生成する.

    Returns:
        FastAPIインスタンス
    """
    app = FastAPI(title="Book Search")

    container = Container()
    config = load_config()
    container.config.from_dict(config.model_dump())
    app.state.container = container

    return app


app = create_app()


@app.get("/health")
def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント.

    Returns:
        ステータス情報
    """
    return {"status": "ok"}


@app.post("/books/search", response_model=SearchResponse)
def search_books(request: SearchRequest) -> SearchResponse:
    """書籍検索エンドポイント.

    Args:
        request: 検索リクエスト

    Returns:
        統合スコア降順の検索結果と診断情報
    """
    container: Container = app.state.container

    try:
        outcome = container.book_search().search(request.query)
    except InvalidQuery as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return SearchResponse(
        results=outcome.results,
        debug=outcome.debug,
        status=outcome.status,
    )
