"""環境変数から読み込む設定。"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PushSettings(BaseSettings):
    """プッシュ通知プロキシのバージョン確認に使う設定。

    Attributes:
        send_push_notifications: プッシュ通知の送信が有効かどうか
        push_notification_server: プッシュ通知プロキシのURL（オプション）
    """

    model_config = SettingsConfigDict(env_file=None, extra="ignore", populate_by_name=True)

    send_push_notifications: bool = Field(default=False, alias="SEND_PUSH_NOTIFICATIONS")
    push_notification_server: str | None = Field(default=None, alias="PUSH_NOTIFICATION_SERVER")


@lru_cache(maxsize=1)
def load_push_settings() -> PushSettings:
    return PushSettings()


def reset_settings_cache() -> None:
    load_push_settings.cache_clear()
