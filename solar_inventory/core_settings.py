from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "solar_inventory"
    POSTGRES_USER: str = "solar"
    POSTGRES_PASSWORD: str = "solar"
    # Full SQLAlchemy URL; wins over the POSTGRES_* parts when set
    DATABASE_URL: Optional[str] = None
    RUN_MIGRATIONS: bool = True
    # Alembic script_location; "package:dir" resolves inside the installed package
    MIGRATIONS_LOCATION: str = "solar_inventory:migrations"

    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 12

    LOG_LEVEL: str = "INFO"

    # First Admin account created by `python -m solar_inventory.seed`
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    RFQ_SESSION_TTL_SECONDS: int = 8 * 60 * 60
    RFQ_MAX_SESSIONS: int = 1024

    # Buyer block printed on RFQ documents
    COMPANY_NAME: str = "Solar Supply d.o.o."
    COMPANY_ADDRESS: str = "Company address, City"
    COMPANY_EMAIL: str = "info@solarsupply.rs"
    COMPANY_PHONE: str = "+381 11 123-4567"
    CURRENCY: str = "RSD"

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
