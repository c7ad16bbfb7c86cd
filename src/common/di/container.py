"""依存性注入コンテナの定義."""

from dependency_injector import containers, providers
from langchain_openai import OpenAIEmbeddings
from supabase import create_client

from src.common.config.lexicon_loader import LexiconLoader
from src.common.config.settings import SearchConfig
from src.components.book_catalog.store import JsonCatalogStore
from src.components.book_catalog.supabase_store import SupabaseCatalogStore
from src.components.book_search.classifier import QueryClassifier
from src.components.book_search.embedding_client import EmbeddingClient
from src.components.book_search.expander import QueryExpander
from src.components.book_search.keyword import KeywordSearch
from src.components.book_search.merger import ResultMerger
from src.components.book_search.scorer import RelevanceScorer
from src.components.book_search.search import HybridBookSearch
from src.components.book_search.semantic import ResultHydrator, SemanticSearch
from src.components.book_search.vector_index import InMemoryVectorIndex, SupabaseVectorIndex


class Container(containers.DeclarativeContainer):
    """アプリケーション全体のDIコンテナ."""

    config = providers.Configuration()

    # YAML語彙ローダー
    lexicon_loader = providers.Singleton(
        LexiconLoader,
        config_path=config.search.lexicon_path,
    )
    lexicon = providers.Singleton(
        lambda loader: loader.load(),
        lexicon_loader,
    )

    search_config = providers.Singleton(
        lambda data: SearchConfig(**data),
        config.search,
    )

    embedding_model = providers.Singleton(
        OpenAIEmbeddings,
        model=config.embedding.model,
        api_key=config.embedding.api_key,
    )

    embedding_client = providers.Singleton(
        EmbeddingClient,
        model=embedding_model,
    )

    supabase_client = providers.Singleton(
        create_client,
        config.catalog.supabase_url,
        config.catalog.supabase_key,
    )

    # カタログ（json / supabase）
    catalog_store = providers.Selector(
        config.catalog.backend,
        json=providers.Singleton(
            JsonCatalogStore,
            path=config.catalog.data_path,
        ),
        supabase=providers.Singleton(
            SupabaseCatalogStore,
            client=supabase_client,
            table=config.catalog.table,
        ),
    )

    # ベクトル索引. jsonカタログは初回検索時に埋め込むインメモリ索引と組み合わせる
    vector_index = providers.Selector(
        config.catalog.backend,
        json=providers.Singleton(
            InMemoryVectorIndex,
            embedding_client=embedding_client,
            catalog_store=catalog_store,
        ),
        supabase=providers.Singleton(
            SupabaseVectorIndex,
            client=supabase_client,
            function_name=config.catalog.match_function,
        ),
    )

    query_classifier = providers.Singleton(
        QueryClassifier,
        lexicon=lexicon,
    )

    query_expander = providers.Singleton(
        QueryExpander,
        lexicon=lexicon,
    )

    result_hydrator = providers.Singleton(
        ResultHydrator,
        catalog_store=catalog_store,
    )

    semantic_search = providers.Singleton(
        SemanticSearch,
        embedding_client=embedding_client,
        vector_index=vector_index,
        hydrator=result_hydrator,
        config=search_config,
    )

    keyword_search = providers.Singleton(
        KeywordSearch,
        catalog_store=catalog_store,
        lexicon=lexicon,
        config=search_config,
    )

    relevance_scorer = providers.Singleton(
        RelevanceScorer,
        lexicon=lexicon,
        scale=config.search.keyword_scale,
    )

    result_merger = providers.Singleton(
        ResultMerger,
        scorer=relevance_scorer,
        keyword_baseline=config.search.keyword_baseline,
    )

    book_search = providers.Singleton(
        HybridBookSearch,
        classifier=query_classifier,
        expander=query_expander,
        semantic_search=semantic_search,
        keyword_search=keyword_search,
        merger=result_merger,
        config=search_config,
    )
