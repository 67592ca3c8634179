# clinic/config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "Clinic Booking Core"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database Settings
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite:///./clinic.db")

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Scheduling
    ENFORCE_AVAILABILITY: bool = False  # require bookings to fit a declared slot

    # Credentials (comma-separated passlib scheme names, first one hashes)
    PASSWORD_SCHEMES: str = "pbkdf2_sha256"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def password_schemes_list(self) -> List[str]:
        return self._split_csv(self.PASSWORD_SCHEMES)

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings: Settings = get_settings()
