from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Service settings loaded from environment variables.

    Keep the port, credential and upstream chat config centralized here.
    """

    service_name: str = "student-backend"
    chat_temperature: float = 0.2
    chat_snapshot_limit: int = 200

    cors_origins: List[str] = [
        "http://localhost:5500",
        "http://127.0.0.1:5500",
        "http://localhost:3000",
        "https://student-info-system.vercel.app",
    ]
    cors_methods: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]

    def __init__(self) -> None:
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.students_file: str = os.getenv("STUDENTS_FILE", "students.json")

        self.openrouter_api_key: Optional[str] = os.getenv("OPENROUTER_API_KEY") or None
        self.chat_api_url: str = os.getenv(
            "CHAT_API_URL", "https://openrouter.ai/api/v1/chat/completions"
        )
        self.chat_model: str = os.getenv("CHAT_MODEL", "openai/gpt-3.5-turbo")
        self.chat_referer: str = os.getenv("CHAT_REFERER", "http://localhost:5500")
        self.chat_title: str = os.getenv("CHAT_TITLE", "Student Info Chat")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
