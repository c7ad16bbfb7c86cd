"""キーワード検索とカタログストアのテスト."""

import json
import time
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import pytest

from fakes import StubCatalogStore, sample_books
from src.common.config.settings import SearchConfig
from src.common.schema.lexicon import Lexicon
from src.components.book_catalog import store as store_module
from src.components.book_catalog.models import SEARCHABLE_FIELDS, BookRecord, FieldMatch, OrPredicate
from src.components.book_catalog.store import JsonCatalogStore
from src.components.book_search.errors import KeywordSearchError
from src.components.book_search.keyword import KeywordSearch, extract_keywords


def _keyword_search(store, **config):
    return KeywordSearch(store, Lexicon(), SearchConfig(**config))


# ---------------------------------------------------------------------------
# ユニットテスト: キーワード抽出
# ---------------------------------------------------------------------------


def test_extract_keywords_drops_stopwords_and_short_tokens():
    """ストップワードと2文字以下のトークンは除かれる."""
    stopwords = frozenset(Lexicon().stopwords)
    assert extract_keywords("Mathematik für die 5 Oberstufe", stopwords) == [
        "mathematik",
        "oberstufe",
    ]


def test_extract_keywords_lowercases():
    """キーワードは小文字化される."""
    assert extract_keywords("WESTERMANN Lesebuch", frozenset()) == ["westermann", "lesebuch"]


# ---------------------------------------------------------------------------
# ユニットテスト: 検索
# ---------------------------------------------------------------------------


def test_stopword_only_query_returns_empty_without_store_call():
    """有効なキーワードが残らなければカタログを呼ばずに空リストを返す."""
    store = StubCatalogStore(sample_books())
    assert _keyword_search(store).search("für die und") == []
    assert store.predicates == []


def test_predicate_covers_every_field_per_token():
    """トークンごとに全検索対象フィールドの部分一致条件が作られる."""
    store = StubCatalogStore(sample_books())
    _keyword_search(store).search("Westermann Lesebuch")

    predicate, limit = store.predicates[0]
    assert limit == 20
    assert len(predicate.clauses) == 2 * len(SEARCHABLE_FIELDS)
    assert {c.field for c in predicate.clauses} == set(SEARCHABLE_FIELDS)
    assert {c.value for c in predicate.clauses} == {"westermann", "lesebuch"}


def test_tokens_are_or_combined():
    """いずれかのトークンがいずれかのフィールドに一致すれば対象になる."""
    store = StubCatalogStore(sample_books())
    books = _keyword_search(store).search("Westermann Deutschunterricht")
    assert [b.id for b in books] == ["b-001", "b-002", "b-003"]


def test_search_is_case_insensitive():
    """大文字小文字を区別せずに部分一致する."""
    store = StubCatalogStore(sample_books())
    books = _keyword_search(store).search("SPRACHSTARKEN")
    assert [b.id for b in books] == ["b-003"]


def test_isbn_query_also_matches_isbn_field():
    """ISBNらしいクエリはisbnフィールドも検索対象にする."""
    store = StubCatalogStore(sample_books())
    books = _keyword_search(store).search("978-3-14-121500-1")
    assert [b.id for b in books] == ["b-001"]
    predicate, _ = store.predicates[0]
    assert "isbn" in {c.field for c in predicate.clauses}


def test_hyphenated_isbn_query_matches_compact_isbn():
    """ハイフン付きのISBNクエリは、ハイフンなしで保存されたISBNにも一致する."""
    book = BookRecord(id="b-010", title="Atlas", isbn="9783161484100")
    store = StubCatalogStore([*sample_books(), book])

    books = _keyword_search(store).search("978-3-16-148410-0")

    assert [b.id for b in books] == ["b-010"]
    predicate, _ = store.predicates[0]
    assert FieldMatch(field="isbn", value="9783161484100") in predicate.clauses


def test_compact_isbn_query_adds_no_duplicate_clause():
    """ハイフンのないISBNクエリではisbnの条件は一つだけ."""
    predicate = _keyword_search(StubCatalogStore()).build_predicate("9783161484100")
    isbn_clauses = [c for c in predicate.clauses if c.field == "isbn"]
    assert isbn_clauses == [FieldMatch(field="isbn", value="9783161484100")]


def test_keyword_limit_is_applied():
    """件数上限が設定値で渡される."""
    store = StubCatalogStore(sample_books())
    books = _keyword_search(store, keyword_limit=1).search("Westermann")
    assert len(books) == 1
    assert store.predicates[0][1] == 1


def test_store_failure_raises_keyword_search_error():
    """カタログの失敗はKeywordSearchErrorとして伝播する."""
    store = StubCatalogStore(search_error=ConnectionError("db down"))
    with pytest.raises(KeywordSearchError, match="db down"):
        _keyword_search(store).search("Westermann")


# ---------------------------------------------------------------------------
# ユニットテスト: JsonCatalogStore
# ---------------------------------------------------------------------------


@pytest.fixture
def json_store(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(
        json.dumps([b.model_dump(exclude_none=True) for b in sample_books()]),
        encoding="utf-8",
    )
    return JsonCatalogStore(path=str(path))


def test_json_store_get_by_ids(json_store):
    """IDで書籍を取得でき、存在しないIDは無視される."""
    books = json_store.get_by_ids(["b-003", "missing", "b-001"])
    assert [b.id for b in books] == ["b-001", "b-003"]


def test_json_store_search_by_predicate(json_store):
    """OR条件に一致する書籍をカタログ順で返す."""
    predicate = OrPredicate(
        clauses=[
            FieldMatch(field="publisher", value="klett"),
            FieldMatch(field="subject", value="deutsch"),
        ],
    )
    books = json_store.search_by_predicate(predicate, limit=20)
    assert [b.id for b in books] == ["b-002", "b-003"]


def test_json_store_keeps_raw_has_pdf(json_store):
    """has_pdfはストレージの値のまま保持され、欠落はNoneになる."""
    books = {b.id: b for b in json_store.list_all()}
    assert books["b-001"].has_pdf is True
    assert books["b-002"].has_pdf == "false"
    assert books["b-003"].has_pdf is None


def test_json_store_missing_file(tmp_path):
    """カタログファイルがない場合FileNotFoundErrorになる."""
    store = JsonCatalogStore(path=str(tmp_path / "none.json"))
    with pytest.raises(FileNotFoundError, match="none.json"):
        store.list_all()


def test_keyword_search_wraps_missing_catalog(tmp_path):
    """カタログファイルの欠落もKeywordSearchErrorになる."""
    store = JsonCatalogStore(path=str(tmp_path / "none.json"))
    with pytest.raises(KeywordSearchError):
        _keyword_search(store).search("Westermann")


def test_json_store_loads_file_once_under_concurrency(json_store, monkeypatch):
    """並列に呼ばれてもカタログファイルの読み込みは一度だけ."""
    calls = []

    def slow_loads(text):
        calls.append(text)
        time.sleep(0.05)
        return json.loads(text)

    monkeypatch.setattr(store_module, "json", SimpleNamespace(loads=slow_loads))

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: json_store.list_all(), range(4)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)
