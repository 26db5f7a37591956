# backend/app/notifications/config.py

"""
Infobip 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from app.utils.config import get_env, get_env_bool, get_env_int


@dataclass(frozen=True)
class InfobipSettings:
    """Infobip API 用の設定値コンテナ。"""

    base_url: str
    api_key: str
    email_from: str = ""
    sms_from: str = "InfoSMS"
    timeout_seconds: int = 10
    dry_run: bool = False


@lru_cache()
def get_infobip_settings() -> InfobipSettings:
    """
    環境変数から Infobip 設定を読み込む。

    必須（NOTIFICATIONS_DRY_RUN が無効な場合のみ）:
      - INFOBIP_API_BASE_URL
      - INFOBIP_API_KEY

    任意:
      - INFOBIP_EMAIL_FROM      (デフォルト: 空 = Infobip 側の既定送信元)
      - INFOBIP_SMS_FROM        (デフォルト: InfoSMS)
      - INFOBIP_TIMEOUT_SECONDS (デフォルト: 10秒)
      - NOTIFICATIONS_DRY_RUN   (デフォルト: false。true なら実送信せずログ出力のみ)
    """
    dry_run = get_env_bool("NOTIFICATIONS_DRY_RUN", default=False)

    base_url = get_env("INFOBIP_API_BASE_URL", default="", required=not dry_run)
    api_key = get_env("INFOBIP_API_KEY", default="", required=not dry_run)

    return InfobipSettings(
        base_url=base_url.rstrip("/"),
        api_key=api_key,
        email_from=get_env("INFOBIP_EMAIL_FROM", default="", required=False),
        sms_from=get_env("INFOBIP_SMS_FROM", default="InfoSMS", required=False),
        timeout_seconds=get_env_int("INFOBIP_TIMEOUT_SECONDS", default=10),
        dry_run=dry_run,
    )
