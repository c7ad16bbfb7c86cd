"""書籍検索の例外定義."""


class BookSearchError(Exception):
    """書籍検索の例外の基底クラス."""


class InvalidQuery(BookSearchError, ValueError):
    """空または空白のみのクエリが渡された場合の例外."""


class SearchBranchError(BookSearchError):
    """片方の検索ブランチのみを中断させる例外の基底クラス."""

    branch = ""


class EmbeddingProviderError(SearchBranchError):
    """Embedding生成に失敗した場合の例外."""

    branch = "semantic"


class SimilaritySearchError(SearchBranchError):
    """ベクトル類似検索に失敗した場合の例外."""

    branch = "semantic"


class KeywordSearchError(SearchBranchError):
    """キーワード検索でカタログの読み取りに失敗した場合の例外."""

    branch = "keyword"


class BothBranchesFailed(BookSearchError):
    """意味検索とキーワード検索の両方が失敗した場合の例外.

    通常は空の結果と診断情報として返し、設定で有効化された場合のみ送出する.
    """

    def __init__(self, errors: list[SearchBranchError]) -> None:
        self.errors = errors
        reasons = "; ".join(f"{type(e).__name__}: {e}" for e in errors)
        super().__init__(f"Both search branches failed: {reasons}")
