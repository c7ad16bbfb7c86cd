"""Hybrid book search combining vector similarity and keyword matching."""

from src.components.book_search.classifier import QueryClassifier
from src.components.book_search.embedding_client import EmbeddingClient
from src.components.book_search.errors import (
    BothBranchesFailed,
    EmbeddingProviderError,
    InvalidQuery,
    KeywordSearchError,
    SimilaritySearchError,
)
from src.components.book_search.expander import QueryExpander
from src.components.book_search.keyword import KeywordSearch
from src.components.book_search.merger import ResultMerger
from src.components.book_search.models import ScoredResult, SearchOutcome, SemanticHit
from src.components.book_search.scorer import RelevanceScorer
from src.components.book_search.search import HybridBookSearch
from src.components.book_search.semantic import ResultHydrator, SemanticSearch

__all__ = [
    "BothBranchesFailed",
    "EmbeddingClient",
    "EmbeddingProviderError",
    "HybridBookSearch",
    "InvalidQuery",
    "KeywordSearch",
    "KeywordSearchError",
    "QueryClassifier",
    "QueryExpander",
    "RelevanceScorer",
    "ResultHydrator",
    "ResultMerger",
    "ScoredResult",
    "SearchOutcome",
    "SemanticHit",
    "SemanticSearch",
    "SimilaritySearchError",
]
