from .client import ClientConfiguration, SimpleClient

__all__ = ["ClientConfiguration", "SimpleClient"]
