# backend/tests/test_notifications_service.py

import logging
from typing import List

import pytest

from app.notifications.client import InfobipAPIError
from app.notifications.factory import get_notification_service
from app.notifications.schemas import (
    InfobipMessage,
    InfobipMessageStatus,
    InfobipResponse,
    NotificationRequest,
    NotificationType,
)
from app.notifications.service import (
    InfobipNotificationSender,
    LoggingNotificationSender,
    NotificationService,
)
from app.utils.config import EnvVarMissingError


def _reply(*group_ids: int, bulk_id: str = "bulk-1") -> InfobipResponse:
    return InfobipResponse(
        bulkId=bulk_id,
        messages=[
            InfobipMessage(
                to="+14155551234",
                messageId=f"msg-{i}",
                status=InfobipMessageStatus(
                    groupId=group_id,
                    groupName="REJECTED" if group_id == 5 else "PENDING",
                    id=group_id,
                    name="STATUS",
                    description="description",
                ),
            )
            for i, group_id in enumerate(group_ids, start=1)
        ],
    )


def _sms_request() -> NotificationRequest:
    return NotificationRequest(
        type=NotificationType.SMS,
        recipient="+14155551234",
        message="hello",
    )


class DummySender:
    def __init__(self, reply: InfobipResponse) -> None:
        self.reply = reply
        self.requests: List[NotificationRequest] = []

    def send(self, request: NotificationRequest) -> InfobipResponse:
        self.requests.append(request)
        return self.reply


class FailingSender:
    def send(self, request: NotificationRequest) -> InfobipResponse:
        raise InfobipAPIError("Infobip API error: 500 boom", status_code=500)


class DummyClient:
    """
    実際の InfobipClient の代わりに使用するテスト用クライアント。
    """

    def __init__(self) -> None:
        self.calls = []

    def send_sms(self, to, text):
        self.calls.append(("sms", to, text))
        return _reply(1)

    def send_email(self, to, subject, text):
        self.calls.append(("email", to, subject, text))
        return _reply(1)


def test_service_builds_response_from_first_message() -> None:
    sender = DummySender(_reply(1, 1))
    service = NotificationService(sender)

    response = service.send(_sms_request())

    assert response.success is True
    assert response.id == "msg-1"
    assert response.response["bulkId"] == "bulk-1"
    assert len(response.response["messages"]) == 2
    assert sender.requests == [_sms_request()]


def test_service_falls_back_to_bulk_id_without_messages() -> None:
    service = NotificationService(DummySender(_reply(bulk_id="bulk-only")))

    response = service.send(_sms_request())

    assert response.id == "bulk-only"
    assert response.success is True


def test_service_marks_rejected_messages_as_failure() -> None:
    service = NotificationService(DummySender(_reply(1, 5)))

    response = service.send(_sms_request())

    assert response.success is False


def test_service_propagates_delivery_error(caplog) -> None:
    """
    DeliveryError はログに記録したうえで、そのまま呼び出し元に送出されること。
    """
    service = NotificationService(FailingSender())

    with caplog.at_level(logging.ERROR, logger="app.notifications.service"):
        with pytest.raises(InfobipAPIError):
            service.send(_sms_request())

    assert any("Failed to deliver sms" in r.getMessage() for r in caplog.records)


def test_infobip_sender_dispatches_by_type() -> None:
    client = DummyClient()
    sender = InfobipNotificationSender(client=client)

    sender.send(_sms_request())
    sender.send(
        NotificationRequest(
            type=NotificationType.EMAIL,
            recipient="user@example.com",
            message="body",
        )
    )
    sender.send(
        NotificationRequest(
            type=NotificationType.EMAIL,
            recipient="user@example.com",
            message="body",
            subject="Hello",
        )
    )

    assert client.calls == [
        ("sms", "+14155551234", "hello"),
        ("email", "user@example.com", "", "body"),
        ("email", "user@example.com", "Hello", "body"),
    ]


def test_logging_sender_logs_and_returns_pending_reply(caplog) -> None:
    logger = logging.getLogger("test_logger_notifications")
    sender = LoggingNotificationSender(logger_=logger)

    with caplog.at_level(logging.INFO, logger="test_logger_notifications"):
        reply = sender.send(_sms_request())

    assert reply.messages[0].to == "+14155551234"
    assert reply.messages[0].status.groupName == "PENDING"
    records = [r for r in caplog.records if "hello" in r.getMessage()]
    assert records, "INFO log should contain the message body"
    assert records[0].levelno == logging.INFO


def test_factory_uses_logging_sender_in_dry_run(monkeypatch) -> None:
    monkeypatch.setenv("NOTIFICATIONS_DRY_RUN", "1")

    service = get_notification_service()

    assert isinstance(service._sender, LoggingNotificationSender)
    assert get_notification_service() is service


def test_factory_uses_infobip_sender_by_default(monkeypatch) -> None:
    monkeypatch.delenv("NOTIFICATIONS_DRY_RUN", raising=False)

    service = get_notification_service()

    assert isinstance(service._sender, InfobipNotificationSender)


def test_factory_requires_credentials_without_dry_run(monkeypatch) -> None:
    monkeypatch.delenv("NOTIFICATIONS_DRY_RUN", raising=False)
    monkeypatch.delenv("INFOBIP_API_KEY", raising=False)

    with pytest.raises(EnvVarMissingError):
        get_notification_service()
