# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- POST /notifications エンドポイントを公開する
- エラー時のレスポンスを ErrorResponse エンベロープ（{"status": "error", "message": ...}）に揃える
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.notifications.router import router as notifications_router
from app.utils.responses import error_response

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - 通知送信エンドポイント (/notifications)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Notification Gateway")

    # ルーター登録
    app.include_router(notifications_router)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """
        ボディが JSON として解釈できない場合など、FastAPI 側の検証エラーも 400 の共通形式で返す。
        """
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Request body must be valid JSON",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        """
        依存解決中（設定不足など）の例外も含め、想定外のエラーを 500 の共通形式で返す。
        """
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error.",
        )

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
