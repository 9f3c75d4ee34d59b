"""HTTP client factory for one-off requests."""

import httpx
from loguru import logger

from simplehttp.domain.client import ClientConfiguration
from simplehttp.utils.proxy_transport import EnvironmentProxyTransport


def build_client(config: ClientConfiguration) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient bound to the given configuration.

    Args:
        config: Connection, timeout and pool parameters

    Returns:
        AsyncClient owning its own transport and connection pool
    """
    logger.debug(f"Creating one-off HTTP client: {config.model_dump()}")
    return httpx.AsyncClient(
        transport=EnvironmentProxyTransport(config),
        timeout=config.timeout(),
    )


def new_client() -> httpx.AsyncClient:
    """Create a client intended for one-off requests, like a push proxy version check.

    Timeouts are short to fail fast against unresponsive hosts, and the pool is
    capped at 10 connections. If something needs a long-lived client, store one
    instead of calling this repeatedly.
    """
    return build_client(ClientConfiguration())
