from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "Shop Ledger API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Customer, supplier and payment tracking for a poultry trading shop"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Storage
    STORAGE_BACKEND: Literal["mongo", "memory"] = "mongo"
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "shopledger"
    # Multi-document transactions need a replica set
    MONGODB_USE_TRANSACTIONS: bool = True

    # Money
    MAX_PAYMENT_AMOUNT: float = 1_000_000
    OVERPAYMENT_POLICY: Literal["reject", "credit"] = "reject"
    REPAIR_MAX_DIFFERENCE: float = 1000
    CURRENCY_SYMBOL: str = "₹"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

    @property
    def allow_credit(self) -> bool:
        return self.OVERPAYMENT_POLICY == "credit"


settings = Settings()
