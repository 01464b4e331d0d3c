"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="TYCOON_BANK_", extra="ignore"
    )

    # Service
    service_name: str = "tycoon-bank"
    log_level: str = "INFO"

    # Randomness: unset means OS entropy, set pins every generator and simulation
    random_seed: Optional[int] = None

    # Monte Carlo
    default_simulations: int = 1000
    max_simulations: int = 20_000

    # Upper bound on applicants/depositors generated per request
    max_generated: int = 200


settings = Settings()
