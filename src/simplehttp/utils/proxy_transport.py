"""環境変数からプロキシを選択するhttpxトランスポート。"""

import ipaddress
from urllib.request import getproxies_environment, proxy_bypass_environment

import httpx
from loguru import logger

from simplehttp.domain.client import ClientConfiguration
from simplehttp.utils.network_backend import TLSHandshakeTimeoutBackend


def _is_loopback(host: str) -> bool:
    """ホストがlocalhostまたはループバックアドレスかどうか判定します。"""
    if host.lower() in ("localhost", "localhost."):
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def proxy_from_environment(url: httpx.URL) -> str | None:
    """リクエストURLに対して使用するプロキシURLを環境変数から取得します。

    HTTP_PROXY / HTTPS_PROXY（小文字が優先）とNO_PROXYに従います。
    localhostとループバックアドレスは常に直接接続します。

    Args:
        url: リクエストURL

    Returns:
        プロキシURL。直接接続する場合はNone
    """
    if _is_loopback(url.host):
        return None

    proxies = getproxies_environment()
    proxy = proxies.get(url.scheme)
    if not proxy:
        return None
    if proxy_bypass_environment(url.host, proxies):
        return None

    # スキームのないプロキシ指定はhttpとして扱う
    if "://" not in proxy:
        proxy = f"http://{proxy}"
    return proxy


class EnvironmentProxyTransport(httpx.AsyncBaseTransport):
    """プロキシごとに内部トランスポートを持ち、リクエスト時にプロキシを選択するトランスポート。

    内部トランスポートはすべて同じプール上限とソケットオプションで遅延生成されます。
    接続プールはプロキシごとに1つで、接続数の上限は宛先ホストをまたいで共有されます。
    """

    def __init__(self, config: ClientConfiguration) -> None:
        """EnvironmentProxyTransportインスタンスを初期化します。

        Args:
            config: プール上限とソケットオプションの元になる設定
        """
        self.config = config
        self._transports: dict[str | None, httpx.AsyncHTTPTransport] = {}

    def _transport_for(self, proxy: str | None) -> httpx.AsyncHTTPTransport:
        transport = self._transports.get(proxy)
        if transport is None:
            logger.debug(f"Creating transport (proxy: {proxy or 'direct'})")
            transport = httpx.AsyncHTTPTransport(
                limits=self.config.limits(),
                socket_options=self.config.socket_options(),
                proxy=httpx.Proxy(proxy) if proxy else None,
            )
            # AsyncHTTPTransportはバックエンドを受け取らないため、接続前のプールに差し込む
            transport._pool._network_backend = TLSHandshakeTimeoutBackend(
                self.config.tls_handshake_timeout
            )
            self._transports[proxy] = transport
        return transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        proxy = proxy_from_environment(request.url)
        try:
            transport = self._transport_for(proxy)
        except (ValueError, ImportError, httpx.InvalidURL) as e:
            # 未対応スキームやsocksio未導入など、環境変数のプロキシ指定が使えない場合
            raise httpx.ProxyError(f"Invalid proxy {proxy!r}: {e}", request=request) from e
        return await transport.handle_async_request(request)

    async def aclose(self) -> None:
        transports = list(self._transports.values())
        self._transports.clear()
        for transport in transports:
            await transport.aclose()
