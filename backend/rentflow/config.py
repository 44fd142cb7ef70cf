from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    environment: str = "development"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"        # "json" | "text"
    log_decisions: bool = False     # also log granted guard decisions (actor ids included)

    model_config = {"env_file": ".env", "env_prefix": "RENTFLOW_", "extra": "ignore"}

    @model_validator(mode="after")
    def _validate_production(self):
        if self.environment == "production" and self.log_decisions:
            raise ValueError(
                "Production must not log individual authorization decisions"
            )
        if self.log_format not in ("json", "text"):
            raise ValueError(f"Unknown log format '{self.log_format}'")
        return self


settings = Settings()
