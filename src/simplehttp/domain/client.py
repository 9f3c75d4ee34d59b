"""ドメイン層のHTTPクライアント定義。

単発リクエスト用クライアントが従う固定設定（ClientConfiguration）と、
リクエスト実行の最小インターフェース（SimpleClient）を提供します。
"""

import socket
from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field


class SimpleClient(Protocol):
    """リクエストを1件実行するだけの最小クライアントのインターフェース。

    httpx.AsyncClientはこのプロトコルを構造的に満たします。
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        """リクエストを送信し、レスポンスを返します。

        Args:
            request: 送信するHTTPリクエスト

        Returns:
            HTTPレスポンス

        Raises:
            httpx.TransportError: 接続・TLSハンドシェイク・ヘッダー待ちのタイムアウト、
                またはホストに到達できない場合
        """
        ...


class ClientConfiguration(BaseModel):
    """単発リクエスト用クライアントの接続・タイムアウト・プール設定。

    時間はすべて秒単位です。バージョン確認のような散発的な呼び出しを想定し、
    タイムアウトは短め、プール上限は小さめに固定しています。

    Attributes:
        connect_timeout: TCP接続確立の最大待ち時間
        keep_alive: TCPキープアライブのプローブ間隔
        max_conns_per_host: 1ホストあたりの同時接続数の上限
        max_idle_conns: プロセス全体のアイドル接続数の上限
        max_idle_conns_per_host: 1ホストあたりのアイドル接続数の上限
        response_header_timeout: リクエスト送信後、レスポンスヘッダーを待つ最大時間
        idle_conn_timeout: アイドル接続をプールに保持する最大時間
        tls_handshake_timeout: TLSハンドシェイク完了の最大待ち時間
        expect_continue_timeout: Expect: 100-continueでContinueを待つ最大時間
    """

    model_config = ConfigDict(frozen=True)

    connect_timeout: float = Field(default=5.0, gt=0)
    keep_alive: float = Field(default=30.0, gt=0)
    max_conns_per_host: int = Field(default=10, gt=0)
    max_idle_conns: int = Field(default=10, gt=0)
    max_idle_conns_per_host: int = Field(default=10, gt=0)
    response_header_timeout: float = Field(default=60.0, gt=0)
    idle_conn_timeout: float = Field(default=30.0, gt=0)
    tls_handshake_timeout: float = Field(default=1.0, gt=0)
    expect_continue_timeout: float = Field(default=1.0, gt=0)

    def timeout(self) -> httpx.Timeout:
        """httpxのタイムアウト設定に変換します。

        httpxの接続タイムアウトはTCP接続とTLSハンドシェイクの両方に適用されます。
        ハンドシェイクだけの上限tls_handshake_timeoutはトランスポートのネットワーク
        バックエンドが別途適用します。

        読み取りタイムアウトがレスポンスヘッダー待ちの上限になります。httpxの読み取り
        タイムアウトは1回の読み取りごとに効くため、ヘッダー受信後のボディの読み取りも
        それぞれ同じ時間で打ち切られます。
        """
        return httpx.Timeout(
            connect=self.connect_timeout,
            read=self.response_header_timeout,
            write=None,
            pool=None,
        )

    def limits(self) -> httpx.Limits:
        """httpxのプール上限に変換します。

        httpxにはホストごとの接続上限がないため、max_conns_per_hostをプール全体の
        上限にしています。宛先ホストをまたいで上限を共有するので、あるホストへの接続が
        上限に達している間は別ホストへのリクエストも空きを待ちます。
        """
        return httpx.Limits(
            max_connections=self.max_conns_per_host,
            max_keepalive_connections=min(self.max_idle_conns, self.max_idle_conns_per_host),
            keepalive_expiry=self.idle_conn_timeout,
        )

    def socket_options(self) -> list[tuple[int, int, int]]:
        """TCPキープアライブを有効にするソケットオプションを返します。"""
        interval = max(1, int(self.keep_alive))
        options = [(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)]
        # TCP_KEEPIDLE / TCP_KEEPINTVL はプラットフォームによっては存在しない
        for name in ("TCP_KEEPIDLE", "TCP_KEEPINTVL"):
            opt = getattr(socket, name, None)
            if opt is not None:
                options.append((socket.IPPROTO_TCP, opt, interval))
        return options
