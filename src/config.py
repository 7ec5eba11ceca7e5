from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "CREDIT_"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    default_currency: str = "PEN"

    # IRR solver (Newton-Raphson)
    irr_max_iterations: int = 100
    irr_tolerance: float = 1e-5
    irr_strict: bool = False  # Raise instead of returning the best estimate

    # Residual balances at or below this are treated as fully repaid
    balance_floor: Decimal = Decimal("0.01")


settings = Settings()
