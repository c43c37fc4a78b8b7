# backend/medibill/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key (used for flashed messages only)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Durable slot for the persisted principal lives in this database
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///medibill.sqlite3",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "database" (durable) or "memory" (ephemeral terminal)
    SESSION_STORAGE = os.environ.get("SESSION_STORAGE", "database")
    SESSION_STORAGE_KEY = os.environ.get("SESSION_STORAGE_KEY", "medibill_user")

    # Remote authentication service
    AUTH_API_BASE_URL = os.environ.get("AUTH_API_BASE_URL", "http://localhost:5000/api")
    AUTH_API_TIMEOUT = float(os.environ.get("AUTH_API_TIMEOUT", "10"))

    LOGIN_ENDPOINT = "auth.login"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Optional list of navigation entry dicts replacing the built-in sidebar
    NAVIGATION_CONFIG = None
