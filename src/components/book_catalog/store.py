"""蔵書カタログの読み取りポートとJSONファイル実装."""

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from src.components.book_catalog.models import BookRecord, OrPredicate

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    """検索エンジンが利用するカタログの読み取りインターフェース."""

    def get_by_ids(self, ids: list[str]) -> list[BookRecord]:
        """IDを指定して書籍を取得する."""
        ...

    def search_by_predicate(self, predicate: OrPredicate, limit: int) -> list[BookRecord]:
        """OR条件に一致する書籍を最大limit件取得する."""
        ...


class JsonCatalogStore:
    """JSONファイルに保存された蔵書カタログを読み取るストアクラス."""

    def __init__(self, path: str = "data/books.json") -> None:
        """JsonCatalogStoreを初期化する.

        Args:
            path: 書籍オブジェクトの配列を格納したJSONファイルのパス
        """
        self.path = Path(path)
        self._books: list[BookRecord] | None = None
        self._lock = threading.Lock()

    def list_all(self) -> list[BookRecord]:
        """カタログの全書籍を読み込む.

        Returns:
            ファイル記載順のBookRecordリスト

        Raises:
            FileNotFoundError: カタログファイルが存在しない場合
        """
        with self._lock:
            if self._books is None:
                if not self.path.exists():
                    msg = f"カタログファイルが見つからない: {self.path}"
                    raise FileNotFoundError(msg)
                data = json.loads(self.path.read_text(encoding="utf-8"))
                self._books = [BookRecord.model_validate(item) for item in data]
                logger.info("Loaded %d books from %s", len(self._books), self.path)
        return self._books

    def get_by_ids(self, ids: list[str]) -> list[BookRecord]:
        """IDを指定して書籍を取得する.

        Args:
            ids: 書籍IDのリスト

        Returns:
            見つかった書籍のリスト. 存在しないIDは無視される.
        """
        wanted = set(ids)
        return [book for book in self.list_all() if book.id in wanted]

    def search_by_predicate(self, predicate: OrPredicate, limit: int) -> list[BookRecord]:
        """OR条件に一致する書籍をカタログ順に最大limit件返す.

        Args:
            predicate: フィールド部分一致のOR条件
            limit: 最大件数

        Returns:
            一致した書籍のリスト
        """
        matched = []
        for book in self.list_all():
            if predicate.matches(book):
                matched.append(book)
                if len(matched) >= limit:
                    break
        return matched
