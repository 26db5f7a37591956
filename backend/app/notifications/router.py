# backend/app/notifications/router.py
"""
通知送信用の FastAPI ルーター定義。

- POST /notifications
"""

import logging
from typing import Any, Union

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from app.utils.responses import error_response

from .client import DeliveryError
from .factory import get_notification_service
from .schemas import ErrorResponse, NotificationResponse
from .service import NotificationService
from .validation import ValidationError, validate_notification_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.post(
    "",
    response_model=NotificationResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Email / SMS 通知の送信",
    description=(
        "type / recipient / message / subject を受け取り、検証したうえで "
        "Infobip に送信する。"
    ),
)
def send_notification(
    payload: Any = Body(None),
    service: NotificationService = Depends(get_notification_service),
) -> Union[NotificationResponse, JSONResponse]:
    """
    通知リクエストを受け取り、送信結果を返すエンドポイント。

    - バリデーションエラー → 400（全フィールドのエラーをまとめて返す）
    - Infobip 側のエラー → 502（プロバイダのメッセージをそのまま返す）
    - 想定外の内部エラー → 500
    """
    try:
        notification = validate_notification_request(payload)
    except ValidationError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, exc.summary())

    try:
        return service.send(notification)
    except DeliveryError as exc:
        return error_response(status.HTTP_502_BAD_GATEWAY, str(exc))
    except Exception:  # noqa: BLE001
        # 詳細はログ側に残し、クライアントには汎用メッセージのみ返す
        logger.exception("Unexpected error while sending notification.")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error while sending notification.",
        )
