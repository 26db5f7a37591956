# backend/app/notifications/__init__.py

"""
通知ゲートウェイ用モジュール群。

受け取った通知リクエスト（email / sms）を検証し、Infobip へ転送する。

構成イメージ:
- schemas: リクエスト / レスポンス / Infobip 応答のスキーマ
- validation: リクエストの入力バリデーション
- config: Infobip 接続設定
- client: Infobip API クライアント
- service: 通知送信インターフェースと実装
- factory: アプリ全体で共有する NotificationService の生成
- router: POST /notifications エンドポイント
"""
