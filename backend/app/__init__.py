# backend/app/__init__.py
"""
Notification Gateway backend application package.

This package contains:
- main: FastAPI application entrypoint
- notifications: request validation, Infobip client and sending service
- utils: environment variable helpers
"""
