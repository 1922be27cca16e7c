from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./rent_ledger.db"
    ENV: str = "dev"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Owner tokens (HS256, self-issued)
    JWT_SECRET: str = "change_me_to_secure_value"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Google Sheets mirror of the payment ledger (off unless configured)
    GOOGLE_SHEETS_ENABLED: bool = False
    GOOGLE_SHEETS_CREDENTIALS_FILE: str = "google-credentials.json"
    GOOGLE_SHEETS_SPREADSHEET_ID: Optional[str] = None
    GOOGLE_SHEETS_WORKSHEET_NAME: str = "Payments"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
