from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Task Manager"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"  # development, production, test
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database
    DB_PATH: str = "./data/taskmanager.db"

    # Frontend URL for CORS
    FRONTEND_URL: str = "http://localhost:3000"

    # Rate limiting
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX: int = 100

    LOG_LEVEL: str = "INFO"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        if self.ENVIRONMENT == "production":
            return [self.FRONTEND_URL]
        return ["http://localhost:3000", "http://127.0.0.1:3000"]

settings = Settings()
