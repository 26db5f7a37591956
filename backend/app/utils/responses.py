# backend/app/utils/responses.py

"""
エラーレスポンス生成用のユーティリティ。
ルーターとアプリ全体の例外ハンドラの両方から使う。
"""

from fastapi.responses import JSONResponse

from app.notifications.schemas import ErrorResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    """ErrorResponse エンベロープを JSONResponse として返す。"""
    body = ErrorResponse(message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())
