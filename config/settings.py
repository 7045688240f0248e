from __future__ import annotations

import os


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Laravel Core Lib")
    APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"


settings = Settings()
