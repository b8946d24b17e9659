"""Engine configuration."""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment (prefix ``COMPLIANCE_``)."""

    # Logging; debug forces DEBUG level
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Solver search budget; None means unbounded
    solver_max_decisions: int | None = None
    solver_timeout_seconds: float | None = None

    # Run the clause-removal conflict extraction on UNSAT
    extract_conflicts: bool = True

    # Default operating set for the JurisdictionalPrimacy principle
    operating_jurisdictions: list[str] = []

    model_config = {
        "env_prefix": "COMPLIANCE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
