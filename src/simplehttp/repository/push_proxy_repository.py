"""プッシュ通知プロキシのバージョン確認を担当するリポジトリ。

単発クライアントの代表的な利用者です。プロキシが応答しない、あるいは
/versionエンドポイントを持たない古いプロキシの場合は空文字列を返します。
"""

from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel

from simplehttp.configs import PushSettings
from simplehttp.domain.client import SimpleClient
from simplehttp.utils.http_client import new_client


class PushProxyVersion(BaseModel):
    """/versionエンドポイントのレスポンス。"""

    version: str = ""
    hash: str = ""


class PushProxyRepository:
    """プッシュ通知プロキシとの通信を担当するリポジトリクラス。"""

    VERSION_PATH = "version"

    def __init__(self, client: SimpleClient) -> None:
        """PushProxyRepositoryインスタンスを初期化します。

        Args:
            client: リクエストの実行に使うクライアント
        """
        self.client = client

    async def fetch_version(self, server_url: str) -> str:
        """プッシュ通知プロキシのバージョンを取得します。

        /versionエンドポイントはバージョン5.27.0で追加されたため、
        それより古いプロキシでは空文字列になります。

        Args:
            server_url: プッシュ通知プロキシのURL

        Returns:
            バージョン文字列。取得できなかった場合は空文字列
        """
        url = f"{server_url.rstrip('/')}/{self.VERSION_PATH}"
        try:
            request = httpx.Request("GET", url)
        except httpx.InvalidURL as e:
            logger.error(f"Failed to build request for {url}: {e}")
            return ""

        try:
            response = await self.client.send(request)
        except httpx.HTTPError as e:
            # 一時的に到達できないだけの可能性もあるので例外にはしない
            logger.error(f"HTTP request to {url} failed: {e!r}")
            return ""

        try:
            if response.status_code != httpx.codes.OK:
                # 古いプロキシは/versionを持たない
                logger.debug(f"Push proxy returned {response.status_code} for {url}")
                return ""
            return self._parse_version(response)
        finally:
            await response.aclose()

    def _parse_version(self, response: httpx.Response) -> str:
        """レスポンスボディからバージョン文字列を取り出します。"""
        try:
            data: Any = response.json()
            if not isinstance(data, dict):
                raise ValueError(f"unexpected body type: {type(data).__name__}")
            # キーは大文字小文字を区別しない
            parsed = PushProxyVersion.model_validate({str(k).lower(): v for k, v in data.items()})
        except ValueError as e:
            logger.error(f"Failed to decode push proxy response: {e}")
            return ""
        return parsed.version


def can_send_push_notifications(settings: PushSettings) -> bool:
    """プッシュ通知が送信可能な設定かどうか判定します。"""
    # ライセンスの概念がないため、MHPNSサーバーのライセンス確認は行わない
    if not settings.send_push_notifications:
        return False
    return bool(settings.push_notification_server)


async def get_push_proxy_version(
    settings: PushSettings, client: SimpleClient | None = None
) -> str:
    """設定されたプッシュ通知プロキシのバージョンを取得します。

    クライアントが渡されなかった場合は単発クライアントを作成し、終了時にクローズします。

    Args:
        settings: プッシュ通知の設定
        client: 使用するクライアント（オプション）

    Returns:
        バージョン文字列。送信不可の設定や取得失敗の場合は空文字列
    """
    if not can_send_push_notifications(settings):
        return ""
    # can_send_push_notificationsで存在を確認済み
    server_url = settings.push_notification_server or ""

    if client is not None:
        return await PushProxyRepository(client).fetch_version(server_url)

    async with new_client() as owned_client:
        return await PushProxyRepository(owned_client).fetch_version(server_url)
