from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
from pydantic import field_validator

class Settings(BaseSettings):
    # Database settings
    POSTGRES_USER: str = 'ledger_user'
    POSTGRES_PASSWORD: str = 'ledger_pass'
    POSTGRES_DB: str = 'ledger_db'
    POSTGRES_HOST: str = 'postgres'
    POSTGRES_PORT: int = 5432

    # Full async URL override (e.g. sqlite+aiosqlite:///./ledger.db for local runs)
    DATABASE_URL: Optional[str] = None

    # Company profile used until one is persisted
    DEFAULT_COMPANY_NAME: str = 'My Company'
    DEFAULT_COMPANY_ADDRESS: List[str] = []
    DEFAULT_COMPANY_GSTIN: str = ''
    DEFAULT_COMPANY_STATE: str = ''
    DEFAULT_COMPANY_STATE_CODE: str = ''

    # Presentation
    RECENT_INVOICES_LIMIT: int = 5
    CURRENCY_SYMBOL: str = '₹'

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: Optional[str] = None
    CREATE_TABLES_ON_STARTUP: bool = True

    @property
    def async_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.ENVIRONMENT == "production" else "DEBUG"

    model_config = SettingsConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("DEBUG", "CREATE_TABLES_ON_STARTUP", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            return v.lower().strip('"').strip("'") in ("true", "1", "yes", "on")
        return bool(v)

settings = Settings()
