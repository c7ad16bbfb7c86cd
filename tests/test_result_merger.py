"""結果マージャーのテスト."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from fakes import mentions_westermann_book, reading_book, westermann_book
from src.common.schema.lexicon import Lexicon
from src.components.book_catalog.models import BookRecord, coerce_has_pdf
from src.components.book_search.merger import ResultMerger
from src.components.book_search.models import SemanticHit
from src.components.book_search.scorer import RelevanceScorer


@pytest.fixture
def merger():
    return ResultMerger(RelevanceScorer(Lexicon()))


# ---------------------------------------------------------------------------
# ユニットテスト: 統合スコア
# ---------------------------------------------------------------------------


def test_semantic_hit_score_is_similarity_plus_keyword_score(merger):
    """意味検索のヒットは類似度とキーワードスコアの和になる."""
    results = merger.merge([SemanticHit(book=westermann_book(), similarity=0.6)], [], "Westermann")
    assert len(results) == 1
    assert results[0].original_similarity == 0.6
    assert results[0].keyword_score == pytest.approx(1.12)
    assert results[0].similarity == pytest.approx(0.6 + 1.12)


def test_keyword_hit_uses_baseline(merger):
    """キーワード検索のみのヒットは基礎スコア0.5にキーワードスコアを足す."""
    results = merger.merge([], [mentions_westermann_book()], "Westermann")
    assert results[0].original_similarity is None
    assert results[0].similarity == pytest.approx(0.5 + 0.32)


def test_semantic_hit_wins_on_id_collision(merger):
    """同じIDが両方にある場合は意味検索側のデータとスコア式を使う."""
    semantic_book = westermann_book()
    keyword_book = westermann_book().model_copy(update={"title": "Keyword Copy"})

    results = merger.merge(
        [SemanticHit(book=semantic_book, similarity=0.45)],
        [keyword_book],
        "Westermann",
    )

    assert len(results) == 1
    assert results[0].title == "Mathematik 5"
    assert results[0].original_similarity == 0.45
    assert results[0].similarity == pytest.approx(0.45 + results[0].keyword_score)


def test_results_sorted_descending(merger):
    """統合スコアの降順に並ぶ."""
    results = merger.merge(
        [SemanticHit(book=reading_book(), similarity=0.9)],
        [mentions_westermann_book(), westermann_book()],
        "Westermann",
    )
    assert [r.id for r in results] == ["b-001", "b-003", "b-002"]
    scores = [r.similarity for r in results]
    assert scores == sorted(scores, reverse=True)


def test_equal_scores_keep_insertion_order(merger):
    """同点は登録順（意味検索、キーワード検索の順）を保つ."""
    books = [BookRecord(id=f"id-{i}", title="Atlas") for i in range(4)]
    results = merger.merge(
        [SemanticHit(book=books[0], similarity=0.5), SemanticHit(book=books[1], similarity=0.5)],
        [books[2], books[3]],
        "Geschichte",
    )
    assert [r.id for r in results] == ["id-0", "id-1", "id-2", "id-3"]


def test_empty_inputs(merger):
    """両方の入力が空なら空リスト."""
    assert merger.merge([], [], "Westermann") == []


def test_results_are_frozen(merger):
    """統合後の結果は変更できない."""
    results = merger.merge([], [westermann_book()], "Westermann")
    with pytest.raises(ValidationError):
        results[0].similarity = 10.0


# ---------------------------------------------------------------------------
# ユニットテスト: has_pdfの変換
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, True),
        ("true", True),
        (False, False),
        ("false", False),
        ("TRUE", False),
        (1, False),
        ("1", False),
        (None, False),
    ],
)
def test_has_pdf_coercion_in_merge(merger, value, expected):
    """Trueと"true"のみがTrueになり、欠落を含むそれ以外はFalse."""
    book = BookRecord(id="x", title="Atlas", has_pdf=value)
    results = merger.merge([SemanticHit(book=book, similarity=0.5)], [book], "Atlas")
    assert results[0].has_pdf is expected


def test_book_record_keeps_raw_has_pdf():
    """BookRecordはhas_pdfの値を型変換せずに保持する."""
    assert BookRecord(id="x", has_pdf=1).has_pdf == 1
    assert BookRecord(id="x", has_pdf=1).has_pdf is not True
    assert BookRecord(id="x", has_pdf="yes").has_pdf == "yes"


@given(value=st.one_of(st.none(), st.booleans(), st.text(max_size=10), st.integers()))
@settings(max_examples=100)
def test_coerce_has_pdf_property(value):
    """任意の値に対して厳密なboolを返す."""
    result = coerce_has_pdf(value)
    assert isinstance(result, bool)
    assert result == (value is True or value == "true")


# ---------------------------------------------------------------------------
# プロパティ: 重複排除
# ---------------------------------------------------------------------------

_ids = st.lists(st.sampled_from(["a", "b", "c", "d", "e"]), max_size=8)


@given(semantic_ids=_ids, keyword_ids=_ids)
@settings(max_examples=100)
def test_merge_never_returns_duplicate_ids(semantic_ids, keyword_ids):
    """同じIDは結果に一度しか現れない."""
    merger = ResultMerger(RelevanceScorer(Lexicon()))
    results = merger.merge(
        [SemanticHit(book=BookRecord(id=i), similarity=0.7) for i in semantic_ids],
        [BookRecord(id=i) for i in keyword_ids],
        "Atlas",
    )
    ids = [r.id for r in results]
    assert len(ids) == len(set(ids))
    assert set(ids) == set(semantic_ids) | set(keyword_ids)
