from .push_proxy_repository import (
    PushProxyRepository,
    can_send_push_notifications,
    get_push_proxy_version,
)

__all__ = ["PushProxyRepository", "can_send_push_notifications", "get_push_proxy_version"]
