# 환경변수 로딩 (.env)
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGO_DB: str = "recipegen"
    MONGO_TIMEOUT_MS: int = 5000

    # LLM (텍스트/이미지)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    OPENAI_MAX_TOKENS: int = 1500
    OPENAI_TEMPERATURE: float = 0.7

    # 인증
    JWT_SECRET: str = "change-me-recipegen-development-secret"
    JWT_EXPIRE_DAYS: int = 30

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    # 저장 레시피 목록 캐시 (초)
    RECIPE_CACHE_TTL_SECONDS: float = 300.0

    class Config:
        env_file = ".env"


settings = Settings()
