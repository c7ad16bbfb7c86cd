"""書籍検索システムの動作確認スクリプト."""

import os

from dotenv import load_dotenv

from src.common.config.settings import load_config
from src.common.di.container import Container
from src.common.lib.logging import getLogger
from src.components.book_catalog.store import JsonCatalogStore
from src.components.book_search.keyword import KeywordSearch
from src.components.book_search.search import HybridBookSearch

logger = getLogger(__name__)

SAMPLE_QUERIES = [
    "Westermann",
    "Mathe",
    "978-3-14-121500-1",
    "Lesebuch für den Deutschunterricht",
]


def _verify_catalog(catalog_store: JsonCatalogStore) -> None:
    """カタログの読み込みを検証する."""
    logger.info("2. カタログの読み込み...")
    books = catalog_store.list_all()
    logger.info("   書籍数: %d ✓", len(books))


def _verify_keyword_search(keyword_search: KeywordSearch) -> None:
    """キーワード検索を検証する."""
    logger.info("3. キーワード検索のテスト...")
    for query in SAMPLE_QUERIES:
        books = keyword_search.search(query)
        logger.info("   %r: %d件 ✓", query, len(books))


def _verify_hybrid_search(book_search: HybridBookSearch) -> None:
    """ハイブリッド検索を検証する."""
    logger.info("4. ハイブリッド検索のテスト...")
    for query in SAMPLE_QUERIES:
        outcome = book_search.search(query)
        logger.info(
            "   %r -> %r: %d件 (%s) ✓",
            query,
            outcome.debug.expanded_query,
            len(outcome.results),
            outcome.status,
        )
        for i, result in enumerate(outcome.results[:3], 1):
            logger.info(
                "   [%d] %s (score: %.3f, keyword: %.3f)",
                i,
                result.title,
                result.similarity,
                result.keyword_score,
            )


def main() -> None:
    """動作確認のメイン処理."""
    logger.info("=== 書籍検索システム 動作確認 ===")
    load_dotenv()

    if not os.getenv("OPENAI_API_KEY"):
        logger.warning("OPENAI_API_KEYが設定されていません")
        logger.warning("環境変数を設定してから実行してください")
        return

    config = load_config()
    if config.catalog.backend != "json":
        logger.warning("CATALOG_BACKEND=json で実行してください")
        return

    container = Container()
    container.config.from_dict(config.model_dump())
    logger.info("1. DIコンテナの初期化... ✓")

    _verify_catalog(container.catalog_store())
    _verify_keyword_search(container.keyword_search())
    _verify_hybrid_search(container.book_search())

    logger.info("=== すべての動作確認が完了しました ===")


if __name__ == "__main__":
    main()
