from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # JWT for admin endpoints: no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 30

    # External market indexer (read-only, see dm_market.infrastructure.indexer_client)
    MARKET_INDEXER_URL: str = "http://localhost:8080/api"
    MARKET_INDEXER_TIMEOUT_SECONDS: float = 10.0

    # Collateral mint that marks a market as a dark (confidential) market
    DARK_COLLATERAL_MINT: str = "JBxiN5BBM8ottNaUUpWw6EFtpMRd6iTnmLYrhZB5ArMo"

    # Ledger
    LEDGER_ENFORCE_COMMITMENT_OPENING: bool = False
    WALLET_PROOF_MAX_AGE_SECONDS: int = 300
    SNOWFLAKE_MACHINE_ID: int = 0

    # App
    APP_NAME: str = "Dark Ledger"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"


settings = Settings()
