"""TLSハンドシェイクに専用のタイムアウトを適用するhttpcoreネットワークバックエンド。

httpcoreは接続タイムアウトをTCP接続とTLSハンドシェイクの両方に使うため、
ハンドシェイクだけを短く打ち切るにはストリームのstart_tlsを包む必要があります。
"""

import ssl
import typing

import httpcore


class TLSHandshakeTimeoutStream(httpcore.AsyncNetworkStream):
    """start_tlsのタイムアウトを上限付きにするストリームのラッパー。"""

    def __init__(self, stream: httpcore.AsyncNetworkStream, tls_handshake_timeout: float) -> None:
        self._stream = stream
        self._tls_handshake_timeout = tls_handshake_timeout

    async def read(self, max_bytes: int, timeout: float | None = None) -> bytes:
        return await self._stream.read(max_bytes, timeout=timeout)

    async def write(self, buffer: bytes, timeout: float | None = None) -> None:
        await self._stream.write(buffer, timeout=timeout)

    async def aclose(self) -> None:
        await self._stream.aclose()

    async def start_tls(
        self,
        ssl_context: ssl.SSLContext,
        server_hostname: str | None = None,
        timeout: float | None = None,
    ) -> httpcore.AsyncNetworkStream:
        """TLSハンドシェイクを行います。

        タイムアウトは呼び出し元の値とtls_handshake_timeoutの小さい方になります。
        タイムアウトした場合はhttpcore.ConnectTimeoutが送出されます。
        """
        if timeout is None:
            timeout = self._tls_handshake_timeout
        else:
            timeout = min(timeout, self._tls_handshake_timeout)
        stream = await self._stream.start_tls(
            ssl_context, server_hostname=server_hostname, timeout=timeout
        )
        # HTTPSプロキシ越しのTLS-in-TLSでも上限が効くように包み直す
        return TLSHandshakeTimeoutStream(stream, self._tls_handshake_timeout)

    def get_extra_info(self, info: str) -> typing.Any:
        return self._stream.get_extra_info(info)


class TLSHandshakeTimeoutBackend(httpcore.AsyncNetworkBackend):
    """接続したストリームをTLSHandshakeTimeoutStreamで包むバックエンド。"""

    def __init__(
        self,
        tls_handshake_timeout: float,
        backend: httpcore.AsyncNetworkBackend | None = None,
    ) -> None:
        """TLSHandshakeTimeoutBackendインスタンスを初期化します。

        Args:
            tls_handshake_timeout: TLSハンドシェイク完了の最大待ち時間（秒）
            backend: 実際のI/Oを行うバックエンド（デフォルト: AnyIOBackend）
        """
        self.tls_handshake_timeout = tls_handshake_timeout
        self._backend = backend or httpcore.AnyIOBackend()

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: typing.Iterable[typing.Any] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        stream = await self._backend.connect_tcp(
            host,
            port,
            timeout=timeout,
            local_address=local_address,
            socket_options=socket_options,
        )
        return TLSHandshakeTimeoutStream(stream, self.tls_handshake_timeout)

    async def connect_unix_socket(
        self,
        path: str,
        timeout: float | None = None,
        socket_options: typing.Iterable[typing.Any] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        stream = await self._backend.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )
        return TLSHandshakeTimeoutStream(stream, self.tls_handshake_timeout)

    async def sleep(self, seconds: float) -> None:
        await self._backend.sleep(seconds)
