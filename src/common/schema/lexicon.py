"""検索用語彙設定のPydanticスキーマ."""

from pydantic import BaseModel, Field

DEFAULT_STOPWORDS = [
    # 冠詞
    "der", "die", "das", "den", "dem", "des",
    "ein", "eine", "einer", "eines", "einem", "einen",
    "the",
    # 前置詞
    "für", "mit", "von", "vom", "zum", "zur", "bei", "nach", "über", "unter",
    "vor", "durch", "ohne", "gegen", "aus", "auf", "ins", "im", "am",
    "for", "with", "from", "about", "into",
    # 接続詞
    "und", "oder", "aber", "sowie", "als", "wie", "auch", "dass",
    "and", "but",
]

DEFAULT_PUBLISHER_INDICATORS = ["verlag", "publisher", "edition", "press", "herausgeber"]

DEFAULT_KNOWN_PUBLISHERS = [
    "westermann",
    "cornelsen",
    "klett",
    "diesterweg",
    "duden",
    "carlsen",
    "beltz",
    "raabe",
    "schroedel",
    "oldenbourg",
    "mildenberger",
    "ravensburger",
    "hueber",
    "buchner",
    "schulverlag",
    "lehrmittelverlag",
]

DEFAULT_CATALOG_TYPE_TERMS = [
    "lehrmittel",
    "lesebuch",
    "lernmaterial",
    "fachbuch",
    "sachbuch",
    "schulbuch",
    "arbeitsheft",
    "arbeitsbuch",
    "übungsheft",
    "textbook",
    "workbook",
]

DEFAULT_EXPANSION_PREFIXES = [
    "book about",
    "literature on",
    "information about",
    "teaching material for",
    "material for",
    "didactics for",
]


class Lexicon(BaseModel):
    """クエリ分類・展開・スコアリングに用いる語彙一式.

    語彙は全て小文字で保持する.
    """

    stopwords: list[str] = Field(default_factory=lambda: list(DEFAULT_STOPWORDS))
    publisher_indicators: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PUBLISHER_INDICATORS),
    )
    known_publishers: list[str] = Field(default_factory=lambda: list(DEFAULT_KNOWN_PUBLISHERS))
    catalog_type_terms: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CATALOG_TYPE_TERMS),
    )
    expansion_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXPANSION_PREFIXES),
        min_length=1,
    )
    publisher_prefix: str = "books from publisher"

    @property
    def strong_terms(self) -> list[str]:
        """重み2.0を与える語（出版社指標語と既知の出版社名）."""
        return [*self.publisher_indicators, *self.known_publishers]
