"""書籍ハイブリッド検索を1回実行するスクリプト."""

import argparse
import sys

from dotenv import load_dotenv

from src.common.config.settings import load_config
from src.common.di.container import Container
from src.common.lib.logging import getLogger
from src.components.book_search.errors import BookSearchError

logger = getLogger(__name__)


def setup() -> Container:
    """DIコンテナを初期化して返す."""
    load_dotenv()
    config = load_config()
    container = Container()
    container.config.from_dict(config.model_dump())
    return container


def main() -> None:
    """コマンドライン引数のクエリで検索し、ランキングを表示する."""
    parser = argparse.ArgumentParser(description="Run a hybrid book search")
    parser.add_argument("query", help="検索クエリ")
    parser.add_argument("--top", type=int, default=10, help="表示件数")
    args = parser.parse_args()

    try:
        container = setup()
        outcome = container.book_search().search(args.query)
    except BookSearchError:
        logger.exception("Search failed")
        sys.exit(1)

    debug = outcome.debug
    logger.info("=" * 60)
    logger.info("Query: %s", debug.original_query)
    logger.info("Expanded: %s", debug.expanded_query)
    logger.info("Threshold: %.2f", debug.threshold)
    logger.info("Semantic hits: %d / Keyword hits: %d", debug.semantic_count, debug.keyword_count)
    logger.info("Status: %s", outcome.status)
    for failure in debug.errors:
        logger.info("  %s branch: %s (%s)", failure.branch, failure.error, failure.message)
    logger.info("=" * 60)
    for i, result in enumerate(outcome.results[: args.top], start=1):
        original = "-" if result.original_similarity is None else f"{result.original_similarity:.3f}"
        logger.info(
            "[%d] %s / %s (score: %.3f, semantic: %s, keyword: %.3f)",
            i,
            result.title,
            result.publisher or "-",
            result.similarity,
            original,
            result.keyword_score,
        )


if __name__ == "__main__":
    main()
