# backend/app/notifications/schemas.py

"""
通知ゲートウェイの入出力スキーマ定義。

- NotificationRequest: POST /notifications のリクエストボディ
- NotificationResponse: 送信成功時のレスポンス
- ErrorResponse: バリデーション失敗・送信失敗時の共通エラーエンベロープ
- Infobip*: Infobip API の応答をそのまま型付けするためのモデル

Infobip 系モデルのフィールド名は Infobip のワイヤフォーマット（camelCase）と
1:1 で対応させているので、勝手にリネームしないこと。
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """送信する通知の種別。"""

    EMAIL = "email"
    SMS = "sms"


class NotificationRequest(BaseModel):
    """
    検証済みの通知リクエスト 1件分。

    このモデルは validation.validate_notification_request() が組み立てる。
    フィールド単位のチェック（宛先フォーマットなど）はそちらで行う。
    """

    type: NotificationType = Field(
        ...,
        description="Type of notification to send",
    )
    recipient: str = Field(
        ...,
        description="Email address or phone number of the recipient",
    )
    message: str = Field(
        ...,
        description="Content of the notification",
    )
    subject: Optional[str] = Field(
        None,
        description="Subject line for email notifications",
    )


class NotificationResponse(BaseModel):
    """送信成功時のレスポンス。"""

    success: bool = Field(
        ...,
        description="Whether the notification was sent successfully",
    )
    id: str = Field(..., description="Unique identifier of the notification")
    response: Dict[str, Any] = Field(
        ...,
        description="Response from the notification service",
    )


class ErrorResponse(BaseModel):
    """
    エラー時の共通レスポンス。

    バリデーションエラーも配送エラーも同じ形で返す。
    """

    status: Literal["error"] = "error"
    message: str = Field(..., description="Error message")


class InfobipMessageStatus(BaseModel):
    groupId: int
    groupName: str
    id: int
    name: str
    description: str


class InfobipMessage(BaseModel):
    to: str
    messageId: str
    status: InfobipMessageStatus


class InfobipResponse(BaseModel):
    """
    Infobip の送信 API（SMS / Email 共通）の応答。

    messages は宛先ごとの結果で、送信順を保持する。
    """

    bulkId: str
    messages: List[InfobipMessage]
