"""クエリ分類器と展開器のテスト."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fakes import first_choice
from src.common.schema.lexicon import Lexicon
from src.components.book_search.classifier import QueryClassifier, looks_like_isbn
from src.components.book_search.expander import QueryExpander


@pytest.fixture
def classifier():
    return QueryClassifier(Lexicon())


@pytest.fixture
def expander():
    return QueryExpander(Lexicon(), selector=first_choice)


# ---------------------------------------------------------------------------
# ユニットテスト: ISBN判定
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("978-3-16-148410-0", True),
        ("9783161484100", True),
        ("12345", True),
        ("1-2-3", False),
        ("Mathe 5", False),
        ("978 3 16", False),
        ("", False),
    ],
)
def test_looks_like_isbn(query, expected):
    """数字とハイフンのみで英数字5文字以上の場合のみISBNとみなす."""
    assert looks_like_isbn(query) is expected


# ---------------------------------------------------------------------------
# ユニットテスト: 分類
# ---------------------------------------------------------------------------


def test_short_query(classifier):
    """2トークン以下は短いクエリと判定される."""
    assert classifier.classify("Mathe").is_short
    assert classifier.classify("Mathe 5").is_short
    assert not classifier.classify("Mathematik für die Oberstufe").is_short


def test_known_publisher_detected(classifier):
    """既知の出版社名を含むクエリは出版社クエリと判定される."""
    result = classifier.classify("Westermann")
    assert result.looks_like_publisher
    assert result.token_count == 1


def test_publisher_indicator_detected(classifier):
    """出版社指標語を含むクエリも出版社クエリと判定される."""
    assert classifier.classify("Bücher vom Verlag an der Ruhr").looks_like_publisher
    assert classifier.classify("Oxford University Press").looks_like_publisher


def test_plain_query_not_publisher(classifier):
    """出版社に関係しないクエリは出版社クエリではない."""
    assert not classifier.classify("Bruchrechnen üben").looks_like_publisher


def test_classify_trims_query(classifier):
    """前後の空白は除去して分類する."""
    result = classifier.classify("  978-3-16-148410-0  ")
    assert result.text == "978-3-16-148410-0"
    assert result.looks_like_isbn


def test_classify_empty_string(classifier):
    """空文字列でも例外にならない."""
    result = classifier.classify("")
    assert result.token_count == 0
    assert not result.looks_like_isbn
    assert not result.looks_like_publisher


@given(query=st.text(max_size=80))
@settings(max_examples=100)
def test_classify_never_raises(query):
    """任意の文字列に対して分類結果を返す."""
    result = QueryClassifier(Lexicon()).classify(query)
    assert result.token_count == len(query.split())
    assert result.is_short == (result.token_count <= 2)


# ---------------------------------------------------------------------------
# ユニットテスト: 展開
# ---------------------------------------------------------------------------


def test_expand_publisher_query(classifier, expander):
    """出版社クエリは出版社の書籍を探す表現に書き換えられる."""
    classification = classifier.classify("Westermann")
    assert expander.expand("Westermann", classification) == "books from publisher Westermann"


def test_expand_publisher_indicator_query(classifier, expander):
    """指標語を含む出版社クエリも同じ形に書き換えられる."""
    query = "Verlag an der Ruhr Materialien"
    classification = classifier.classify(query)
    assert expander.expand(query, classification) == f"books from publisher {query}"


def test_expand_short_query_uses_selector(classifier, expander):
    """短いクエリにはセレクタが選んだ接頭辞が付く."""
    classification = classifier.classify("Mathe")
    assert expander.expand("Mathe", classification) == "book about Mathe"


def test_expand_long_query_unchanged(classifier, expander):
    """3トークン以上の通常クエリはそのまま返る."""
    query = "Mathematik für die Oberstufe"
    assert expander.expand(query, classifier.classify(query)) == query


@given(query=st.text(alphabet="abcdefghijklmnop", min_size=1, max_size=12))
@settings(max_examples=50)
def test_default_selector_picks_from_pool(query):
    """既定のランダムセレクタも接頭辞プールから選ぶ."""
    lexicon = Lexicon()
    expander = QueryExpander(lexicon)
    classification = QueryClassifier(lexicon).classify(query)
    expanded = expander.expand(query, classification)
    if classification.looks_like_publisher:
        assert expanded == f"{lexicon.publisher_prefix} {query}"
    else:
        prefix = expanded[: -len(query) - 1]
        assert prefix in lexicon.expansion_prefixes
