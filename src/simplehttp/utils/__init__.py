from .http_client import build_client, new_client
from .proxy_transport import EnvironmentProxyTransport, proxy_from_environment

__all__ = [
    "EnvironmentProxyTransport",
    "build_client",
    "new_client",
    "proxy_from_environment",
]
