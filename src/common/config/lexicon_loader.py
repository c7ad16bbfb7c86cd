"""YAML設定ファイルから検索用語彙を読み込むローダー."""

import logging
from pathlib import Path

import yaml

from src.common.schema.lexicon import Lexicon

logger = logging.getLogger(__name__)


class LexiconLoader:
    """lexicon.yamlを読み込むローダークラス."""

    def __init__(self, config_path: str | None = "config/lexicon.yaml") -> None:
        """LexiconLoaderを初期化する.

        Args:
            config_path: 語彙ファイルのパス. Noneの場合は組み込みのデフォルト語彙を使う.
        """
        self.config_path = Path(config_path) if config_path else None

    def load(self) -> Lexicon:
        """YAMLを読み込みLexiconに変換する.

        YAMLに記載のないキーは組み込みのデフォルト値になる.

        Returns:
            小文字化済みのLexicon

        Raises:
            FileNotFoundError: 指定された語彙ファイルが存在しない場合
        """
        if self.config_path is None:
            return Lexicon()
        if not self.config_path.exists():
            msg = f"語彙ファイルが見つからない: {self.config_path}"
            raise FileNotFoundError(msg)
        data = yaml.safe_load(self.config_path.read_text(encoding="utf-8")) or {}
        logger.info("Loaded search lexicon from %s", self.config_path)
        return Lexicon(**_lowercase_lists(data))


def _lowercase_lists(data: dict) -> dict:
    """リスト値の要素を小文字に揃える."""
    return {
        key: [str(item).lower() for item in value] if isinstance(value, list) else value
        for key, value in data.items()
    }
