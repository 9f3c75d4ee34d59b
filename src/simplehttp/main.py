"""プッシュ通知プロキシのバージョン確認のエントリーポイント。

環境変数の設定を読み込み、単発クライアントでバージョンを取得してログ出力します。
"""

import asyncio

from loguru import logger

from simplehttp.configs import load_push_settings
from simplehttp.repository import get_push_proxy_version
from simplehttp.utils.log import setup_logger


async def main() -> None:
    """バージョン確認の非同期エントリーポイント。"""
    settings = load_push_settings()
    logger.info(f"Checking push proxy version: {settings.push_notification_server}")

    version = await get_push_proxy_version(settings)
    if version:
        logger.info(f"Push proxy version: {version}")
    else:
        logger.warning("Push proxy version is unavailable")


if __name__ == "__main__":
    setup_logger()
    asyncio.run(main())
