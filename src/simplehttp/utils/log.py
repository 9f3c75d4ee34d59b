import sys

from loguru import logger


def setup_logger(level: str = "DEBUG") -> None:
    """loguruの出力先を標準エラー出力1つに設定し直します。

    Args:
        level: 出力する最小ログレベル
    """
    # 一度デフォルトの設定を消してから再設定
    logger.remove()
    logger.add(sys.stderr, level=level)
