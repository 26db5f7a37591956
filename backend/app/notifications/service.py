# backend/app/notifications/service.py

"""
通知送信インターフェースと実装。

- NotificationRequest を受け取る send() インターフェース（NotificationSender）
- Infobip へ実送信する InfobipNotificationSender
- ログ出力のみ行う LoggingNotificationSender（dry-run 用）
- Sender の結果を NotificationResponse にまとめる NotificationService

を提供する。リトライや配送状況の追跡は行わない。
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Protocol

from .client import DeliveryError, InfobipClient
from .schemas import (
    InfobipMessage,
    InfobipMessageStatus,
    InfobipResponse,
    NotificationRequest,
    NotificationResponse,
    NotificationType,
)

logger = logging.getLogger(__name__)

# Infobip の status.groupId。5 = REJECTED（受付拒否）
REJECTED_GROUP_ID = 5


class NotificationSender(Protocol):
    """
    通知送信の最小インターフェース。

    実装例:
    - InfobipNotificationSender: Infobip API 経由で送信
    - LoggingNotificationSender: ログ出力のみ
    """

    def send(self, request: NotificationRequest) -> InfobipResponse:  # pragma: no cover - Protocol
        ...


class InfobipNotificationSender:
    """
    NotificationRequest の type に応じて InfobipClient の SMS / Email 送信を呼び分ける Sender。
    """

    def __init__(self, client: Optional[InfobipClient] = None) -> None:
        self.client = client or InfobipClient()

    def send(self, request: NotificationRequest) -> InfobipResponse:
        if request.type == NotificationType.EMAIL:
            return self.client.send_email(
                to=request.recipient,
                subject=request.subject or "",
                text=request.message,
            )
        return self.client.send_sms(to=request.recipient, text=request.message)


class LoggingNotificationSender:
    """
    NotificationRequest を Python の logger に記録するだけの Sender。

    - NOTIFICATIONS_DRY_RUN=true の場合に使う
    - 実際の外部サービスへの送信は行わず、Infobip と同じ形の応答（PENDING）を返す
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def send(self, request: NotificationRequest) -> InfobipResponse:
        subject = f" subject={request.subject!r}" if request.subject is not None else ""
        self._logger.info(
            "[dry-run][%s] to=%s%s %s",
            request.type.value,
            request.recipient,
            subject,
            request.message,
        )

        return InfobipResponse(
            bulkId=str(uuid.uuid4()),
            messages=[
                InfobipMessage(
                    to=request.recipient,
                    messageId=str(uuid.uuid4()),
                    status=InfobipMessageStatus(
                        groupId=1,
                        groupName="PENDING",
                        id=26,
                        name="PENDING_ACCEPTED",
                        description="Message sent to next instance",
                    ),
                )
            ],
        )


class NotificationService:
    """
    NotificationSender を使って通知を送り、NotificationResponse を返すサービス。

    - id: 先頭メッセージの messageId（無ければ bulkId）
    - success: REJECTED グループのメッセージが 1件も無いこと
    - response: プロバイダ応答をそのまま dict 化したもの
    """

    def __init__(self, sender: NotificationSender) -> None:
        self._sender = sender

    def send(self, request: NotificationRequest) -> NotificationResponse:
        """
        通知を 1件送信する。

        DeliveryError はログに残したうえでそのまま呼び出し元へ送出する。
        """
        try:
            reply = self._sender.send(request)
        except DeliveryError:
            logger.exception(
                "Failed to deliver %s notification to %s.",
                request.type.value,
                request.recipient,
            )
            raise

        notification_id = reply.messages[0].messageId if reply.messages else reply.bulkId
        success = all(
            message.status.groupId != REJECTED_GROUP_ID for message in reply.messages
        )

        logger.info(
            "Sent %s notification id=%s bulkId=%s success=%s",
            request.type.value,
            notification_id,
            reply.bulkId,
            success,
        )

        return NotificationResponse(
            success=success,
            id=notification_id,
            response=reply.model_dump(),
        )
