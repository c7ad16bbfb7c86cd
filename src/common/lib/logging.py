"""ロギング設定ユーティリティ."""

import logging
import os

LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"


def getLogger(name: str) -> logging.Logger:
    """スクリプト用のロガーを取得する.

    初回呼び出しでルートロガーを設定する. 検索ブランチは別スレッドで動くため、
    書式にスレッド名を含める. レベルは環境変数LOG_LEVELで指定する（既定はINFO）.

    Args:
        name: ロガー名（通常は__name__を使用）

    Returns:
        ロガーインスタンス
    """
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(), format=LOG_FORMAT)
    return logging.getLogger(name)
