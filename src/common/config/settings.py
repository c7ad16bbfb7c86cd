"""アプリケーション設定の管理."""

import os

from pydantic import BaseModel, Field


class EmbeddingConfig(BaseModel):
    """Embedding設定."""

    model: str = "text-embedding-3-small"
    api_key: str = ""


class CatalogConfig(BaseModel):
    """蔵書カタログとベクトル索引の接続設定."""

    backend: str = "json"
    data_path: str = "data/books.json"
    supabase_url: str = ""
    supabase_key: str = ""
    table: str = "books"
    match_function: str = "match_books"


class SearchConfig(BaseModel):
    """書籍検索の調整パラメータ."""

    short_query_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    default_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    semantic_limit: int = Field(default=10, gt=0)
    keyword_limit: int = Field(default=20, gt=0)
    keyword_baseline: float = 0.5
    keyword_scale: float = 0.8
    parallel: bool = True
    raise_on_total_failure: bool = False
    lexicon_path: str | None = "config/lexicon.yaml"


class AppConfig(BaseModel):
    """アプリケーション全体の設定."""

    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)


def _env_flag(name: str, default: str) -> bool:
    """真偽値の環境変数を読み取る."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def load_config() -> AppConfig:
    """環境変数から設定を読み込む.

    Returns:
        アプリケーション設定
    """
    return AppConfig(
        embedding=EmbeddingConfig(
            model=os.getenv("EMBEDDING_MODEL", "text-embedding-3-small"),
            api_key=os.getenv("OPENAI_API_KEY", ""),
        ),
        catalog=CatalogConfig(
            backend=os.getenv("CATALOG_BACKEND", "json"),
            data_path=os.getenv("CATALOG_DATA_PATH", "data/books.json"),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
            table=os.getenv("CATALOG_TABLE", "books"),
            match_function=os.getenv("CATALOG_MATCH_FUNCTION", "match_books"),
        ),
        search=SearchConfig(
            short_query_threshold=float(os.getenv("SEARCH_SHORT_QUERY_THRESHOLD", "0.4")),
            default_threshold=float(os.getenv("SEARCH_DEFAULT_THRESHOLD", "0.5")),
            semantic_limit=int(os.getenv("SEARCH_SEMANTIC_LIMIT", "10")),
            keyword_limit=int(os.getenv("SEARCH_KEYWORD_LIMIT", "20")),
            parallel=_env_flag("SEARCH_PARALLEL", "true"),
            raise_on_total_failure=_env_flag("SEARCH_RAISE_ON_TOTAL_FAILURE", "false"),
            lexicon_path=os.getenv("SEARCH_LEXICON_PATH", "config/lexicon.yaml") or None,
        ),
    )
