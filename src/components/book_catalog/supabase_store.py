"""Supabaseの``books``テーブルを読み取るカタログストア."""

import logging

from supabase import Client

from src.components.book_catalog.models import BookRecord, OrPredicate

logger = logging.getLogger(__name__)

BOOK_COLUMNS = (
    "id, title, author, isbn, subject, level, year, type, publisher, "
    "description, available, location, school, has_pdf"
)


class SupabaseCatalogStore:
    """Supabase(PostgREST)経由で蔵書カタログを読み取るストアクラス."""

    def __init__(self, client: Client, table: str = "books") -> None:
        """SupabaseCatalogStoreを初期化する.

        Args:
            client: Supabaseクライアント
            table: 書籍テーブル名
        """
        self.client = client
        self.table = table

    def get_by_ids(self, ids: list[str]) -> list[BookRecord]:
        """IDを指定して書籍を取得する."""
        if not ids:
            return []
        response = self.client.table(self.table).select(BOOK_COLUMNS).in_("id", ids).execute()
        return [BookRecord.model_validate(row) for row in response.data or []]

    def search_by_predicate(self, predicate: OrPredicate, limit: int) -> list[BookRecord]:
        """OR条件を``or``フィルタに変換して検索する."""
        if not predicate.clauses:
            return []
        response = (
            self.client.table(self.table)
            .select(BOOK_COLUMNS)
            .or_(predicate.to_postgrest())
            .limit(limit)
            .execute()
        )
        rows = response.data or []
        logger.debug("Keyword predicate matched %d rows", len(rows))
        return [BookRecord.model_validate(row) for row in rows]
