from simplehttp.domain import ClientConfiguration, SimpleClient
from simplehttp.utils import build_client, new_client

__all__ = ["ClientConfiguration", "SimpleClient", "build_client", "new_client"]
