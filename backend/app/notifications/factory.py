# backend/app/notifications/factory.py

"""
通知サービスの簡易ファクトリ。

- 通常は InfobipNotificationSender を使う NotificationService を返す。
- NOTIFICATIONS_DRY_RUN=true の場合は LoggingNotificationSender を使う。
"""

from __future__ import annotations

from typing import Optional

from .client import InfobipClient
from .config import get_infobip_settings
from .service import (
    InfobipNotificationSender,
    LoggingNotificationSender,
    NotificationSender,
    NotificationService,
)

_notification_service: Optional[NotificationService] = None


def get_notification_service() -> NotificationService:
    """
    アプリ全体で共有する NotificationService を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _notification_service
    if _notification_service is None:
        settings = get_infobip_settings()
        sender: NotificationSender
        if settings.dry_run:
            sender = LoggingNotificationSender()
        else:
            sender = InfobipNotificationSender(InfobipClient(settings=settings))
        _notification_service = NotificationService(sender)
    return _notification_service


def reset_notification_service() -> None:
    """
    テスト用にシングルトン状態と設定キャッシュをリセットする。
    """
    global _notification_service
    _notification_service = None
    get_infobip_settings.cache_clear()
