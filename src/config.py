"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "riskwatch"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    # Rolling history handed to every assessment
    history_capacity: int = 50

    # Rule evaluation budget per transaction
    max_rules_per_evaluation: int = 200

    # Parallel assessment
    assessment_workers: int = 4

    # Synthetic transaction source
    simulation_seed: int = 42

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
