"""蔵書カタログのデータモデル定義."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# 表示に必要なフィールド. 一つでも欠けていればカタログから再取得する
DISPLAY_FIELDS = ("title", "author", "subject", "level", "description")

# キーワード検索とスコアリングの対象フィールド
SEARCHABLE_FIELDS = ("title", "author", "subject", "level", "type", "publisher", "description")


class BookRecord(BaseModel):
    """カタログ上の1冊の書籍を表すモデル.

    類似検索の部分射影でも扱えるよう、id以外のフィールドは全て省略可能.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    level: str | None = None
    year: int | None = None
    type: str | None = None
    publisher: str | None = None
    description: str | None = None
    available: bool | None = None
    isbn: str | None = None
    location: str | None = None
    school: str | None = None
    # ストレージ由来の値を型変換せずに保持する. 判定はcoerce_has_pdfで行う
    has_pdf: Any = None

    def is_partial(self) -> bool:
        """表示用フィールドが欠けているかどうかを返す."""
        return any(getattr(self, name) is None for name in DISPLAY_FIELDS)

    def field_text(self, name: str) -> str:
        """指定フィールドを小文字化した文字列で返す. 欠落時は空文字."""
        value = getattr(self, name, None)
        if value is None:
            return ""
        return str(value).lower()

    @property
    def searchable_text(self) -> str:
        """検索対象フィールドを連結した小文字テキスト."""
        return " ".join(self.field_text(name) for name in SEARCHABLE_FIELDS)


class FieldMatch(BaseModel):
    """単一フィールドに対する部分一致条件（大文字小文字を区別しない）."""

    field: str
    value: str

    def matches(self, book: BookRecord) -> bool:
        """書籍がこの条件を満たすかを判定する."""
        return self.value.lower() in book.field_text(self.field)


class OrPredicate(BaseModel):
    """FieldMatchのOR結合."""

    clauses: list[FieldMatch] = Field(default_factory=list)

    def matches(self, book: BookRecord) -> bool:
        """いずれかの条件に一致すればTrueを返す."""
        return any(clause.matches(book) for clause in self.clauses)

    def to_postgrest(self) -> str:
        """PostgRESTの``or``フィルタ文字列に変換する.

        Returns:
            ``title.ilike.*mathe*,author.ilike.*mathe*`` 形式の文字列
        """
        return ",".join(
            f"{clause.field}.ilike.{_quote_postgrest(f'*{clause.value}*')}"
            for clause in self.clauses
        )


def _quote_postgrest(value: str) -> str:
    """PostgRESTの予約文字を含む値をダブルクォートで囲む."""
    if any(ch in value for ch in ',.:()"\\'):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def coerce_has_pdf(value: Any) -> bool:
    """has_pdfの値を厳密なboolに変換する.

    ``True`` と文字列 ``"true"`` のみをTrueとし、欠落を含むそれ以外は全てFalse.
    """
    return value is True or value == "true"
