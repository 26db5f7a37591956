# backend/app/notifications/validation.py

"""
通知リクエストの入力バリデーション。

外部から受け取った任意のペイロード（JSON デコード直後の dict など）を検査し、
NotificationRequest を組み立てる。

- フィールドごとのチェックは独立した関数として定義する
- 全フィールドを評価し、エラーはまとめて ValidationError で返す（最初の 1件で止めない）
- 状態を持たず、ログも出さない純粋関数として扱う
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .schemas import NotificationRequest, NotificationType

TYPE_REQUIRED = "Notification type is required"
TYPE_INVALID = "Notification type must be either 'email' or 'sms'"
RECIPIENT_REQUIRED = "Recipient is required"
RECIPIENT_NOT_STRING = "Recipient must be a string"
RECIPIENT_INVALID = "Invalid email or phone number format"
MESSAGE_REQUIRED = "Message is required"
MESSAGE_NOT_STRING = "Message must be a string"
MESSAGE_EMPTY = "Message cannot be empty"
SUBJECT_NOT_STRING = "Subject must be a string"
BODY_NOT_OBJECT = "Request body must be a JSON object"

# 空白文字の集合。Python の \s は \x1c-\x1f を含み U+FEFF を含まないため、
# ECMAScript の \s と同じ集合を明示する。
_WHITESPACE = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_NON_SPACE_OR_AT = f"[^{_WHITESPACE}@]+"

# RFC 5322 準拠ではなく「local@domain.tld」の形だけを見る簡易チェック。
EMAIL_PATTERN = re.compile(
    rf"{_NON_SPACE_OR_AT}@{_NON_SPACE_OR_AT}\.{_NON_SPACE_OR_AT}"
)
# E.164 風: 先頭 + は任意、先頭桁は 1-9、合計 2〜15 桁。
PHONE_PATTERN = re.compile(r"\+?[1-9][0-9]{1,14}")

_MISSING = object()


@dataclass(frozen=True)
class FieldError:
    """1 フィールド分のバリデーションエラー。"""

    field: str
    message: str


class ValidationError(ValueError):
    """
    リクエストが 1つ以上のフィールドルールに違反した場合の例外。

    呼び出し側（API 層）で 400 Bad Request の ErrorResponse に変換する想定。
    """

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__(self.summary())

    def summary(self) -> str:
        """「field: message」を '; ' で連結した表示用文字列を返す。"""
        return "; ".join(f"{err.field}: {err.message}" for err in self.errors)


def check_type(value: Any) -> Optional[str]:
    """type フィールドのチェック。問題があればエラーメッセージを返す。"""
    if value is _MISSING:
        return TYPE_REQUIRED
    if not isinstance(value, str) or value not in {t.value for t in NotificationType}:
        return TYPE_INVALID
    return None


def is_valid_recipient(value: str) -> bool:
    """
    宛先がメールアドレス or 電話番号の形をしているか判定する。

    '@' を含むかどうかでどちらの書式を適用するかを先に決める。
    '@' を含むものは電話番号としては一切評価しない。
    """
    if "@" in value:
        return EMAIL_PATTERN.fullmatch(value) is not None
    return PHONE_PATTERN.fullmatch(value) is not None


def check_recipient(value: Any) -> Optional[str]:
    if value is _MISSING:
        return RECIPIENT_REQUIRED
    if not isinstance(value, str):
        return RECIPIENT_NOT_STRING
    if not is_valid_recipient(value):
        return RECIPIENT_INVALID
    return None


def check_message(value: Any) -> Optional[str]:
    if value is _MISSING:
        return MESSAGE_REQUIRED
    if not isinstance(value, str):
        return MESSAGE_NOT_STRING
    if len(value) < 1:
        return MESSAGE_EMPTY
    return None


def check_subject(value: Any) -> Optional[str]:
    # 任意項目。type との組み合わせ（sms に subject 付き等）は問わない。
    if value is _MISSING:
        return None
    if not isinstance(value, str):
        return SUBJECT_NOT_STRING
    return None


FIELD_CHECKS: Tuple[Tuple[str, Callable[[Any], Optional[str]]], ...] = (
    ("type", check_type),
    ("recipient", check_recipient),
    ("message", check_message),
    ("subject", check_subject),
)


def collect_errors(payload: Any) -> List[FieldError]:
    """
    ペイロードに対して全フィールドのチェックを実行し、エラーの一覧を返す。

    エラーが無ければ空リスト。
    """
    if not isinstance(payload, Mapping):
        return [FieldError(field="body", message=BODY_NOT_OBJECT)]

    errors: List[FieldError] = []
    for field, check in FIELD_CHECKS:
        message = check(payload.get(field, _MISSING))
        if message is not None:
            errors.append(FieldError(field=field, message=message))
    return errors


def validate_notification_request(payload: Any) -> NotificationRequest:
    """
    任意のペイロードを検証し、NotificationRequest を返す。

    :raises ValidationError: 1つでもルール違反があった場合（部分的な結果は返さない）。
    """
    errors = collect_errors(payload)
    if errors:
        raise ValidationError(errors)

    return NotificationRequest(
        type=NotificationType(payload["type"]),
        recipient=payload["recipient"],
        message=payload["message"],
        subject=payload.get("subject"),
    )
