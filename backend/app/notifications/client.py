# backend/app/notifications/client.py

"""
Infobip API との通信を担当するクライアントモジュール。

- SMS: POST /sms/2/text/advanced（JSON）
- Email: POST /email/3/send（multipart/form-data）

応答は InfobipResponse に変換して返す。リトライは行わない。
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from .config import InfobipSettings, get_infobip_settings
from .schemas import InfobipResponse


class DeliveryError(RuntimeError):
    """配送（外部プロバイダ呼び出し）全般の基底例外。"""


class InfobipAuthError(DeliveryError):
    """認証・権限関連のエラー。"""


class InfobipAPIError(DeliveryError):
    """その他 Infobip API 呼び出し時のエラー。"""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InfobipConnectionError(DeliveryError):
    """接続エラー・タイムアウト時の例外。"""


class InfobipClient:
    """
    Infobip API の薄いラッパークライアント。

    - SMS 送信
    - Email 送信
    """

    def __init__(self, settings: Optional[InfobipSettings] = None) -> None:
        self.settings = settings or get_infobip_settings()

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    @property
    def timeout(self) -> int:
        return self.settings.timeout_seconds

    def _build_headers(self) -> Dict[str, str]:
        """
        Infobip API 呼び出しに必要なヘッダーを構築。

        Content-Type は httpx に任せる（JSON / multipart で異なるため）。
        """
        return {
            "Authorization": f"App {self.settings.api_key}",
            "Accept": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        if response.status_code == 401:
            raise InfobipAuthError("Unauthorized. Check INFOBIP_API_KEY.")
        if response.status_code == 403:
            raise InfobipAuthError("Forbidden. Check Infobip API key permissions.")
        if response.status_code >= 400:
            raise InfobipAPIError(
                f"Infobip API error: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

    def _parse_response(self, response: httpx.Response) -> InfobipResponse:
        """
        成功レスポンスを InfobipResponse に変換する。

        JSON でない / 期待する形でない場合は InfobipAPIError。
        """
        try:
            data = response.json()
        except ValueError as exc:
            raise InfobipAPIError(
                "Unexpected Infobip API response format: body is not JSON.",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        try:
            return InfobipResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise InfobipAPIError(
                "Unexpected Infobip API response format: "
                "expected 'bulkId' and 'messages'.",
                status_code=response.status_code,
                body=data,
            ) from exc

    def send_sms(self, to: str, text: str) -> InfobipResponse:
        """
        SMS を 1件送信する。

        :param to: 宛先電話番号（E.164 風の文字列）
        :param text: 本文
        :raises InfobipAuthError: 401 / 403 の場合。
        :raises InfobipAPIError: その他 4xx/5xx、または応答形式が不正な場合。
        :raises InfobipConnectionError: 接続エラーやタイムアウト時。
        """
        url = f"{self.base_url}/sms/2/text/advanced"

        payload: Dict[str, Any] = {
            "messages": [
                {
                    "from": self.settings.sms_from,
                    "destinations": [{"to": to}],
                    "text": text,
                }
            ]
        }

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                json=payload,
                timeout=self.timeout,
            )
        except httpx.RequestError as exc:
            raise InfobipConnectionError(f"Failed to call Infobip SMS API: {exc}") from exc

        self._raise_for_status(response)
        return self._parse_response(response)

    def send_email(self, to: str, subject: str, text: str) -> InfobipResponse:
        """
        Email を 1件送信する。

        Infobip の Email API は multipart/form-data のみ受け付けるため、
        各フィールドを (None, value) の形で files に詰めて送る。
        """
        url = f"{self.base_url}/email/3/send"

        fields: Dict[str, str] = {"to": to, "subject": subject, "text": text}
        if self.settings.email_from:
            fields["from"] = self.settings.email_from

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                files={name: (None, value) for name, value in fields.items()},
                timeout=self.timeout,
            )
        except httpx.RequestError as exc:
            raise InfobipConnectionError(
                f"Failed to call Infobip Email API: {exc}"
            ) from exc

        self._raise_for_status(response)
        return self._parse_response(response)
