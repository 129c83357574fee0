from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    intervals_api_key: str = Field(default="", validation_alias="INTERVALS_API_KEY")
    intervals_athlete_id: str = Field(default="", validation_alias="INTERVALS_ATHLETE_ID")
    whoop_client_id: str = Field(default="", validation_alias="WHOOP_CLIENT_ID")
    whoop_client_secret: str = Field(default="", validation_alias="WHOOP_CLIENT_SECRET")
    whoop_access_token: str = Field(default="", validation_alias="WHOOP_ACCESS_TOKEN")
    whoop_refresh_token: str = Field(default="", validation_alias="WHOOP_REFRESH_TOKEN")
    trainerroad_calendar_url: str = Field(default="", validation_alias="TRAINERROAD_CALENDAR_URL")
    redis_url: str = Field(
        default="",
        validation_alias="REDIS_URL",
        description="Optional Redis URL for Whoop token caching. Empty disables caching.",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="", validation_alias="LOG_FILE")
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias="HTTP_TIMEOUT_SECONDS",
        description="Timeout applied by the HTTP client to each external call",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("intervals_api_key", "intervals_athlete_id")
    @classmethod
    def validate_intervals_credentials(cls, value: str) -> str:
        """Warn when Intervals.icu credentials are missing.

        Empty values are allowed so the service can start; the Intervals.icu
        backed tools will report a configuration error when called.
        """
        if not value:
            logger.warning(
                "INTERVALS_API_KEY and/or INTERVALS_ATHLETE_ID are not set. "
                "Workout history, training load and Intervals.icu calendar tools will not work."
            )
        return value

    @field_validator("trainerroad_calendar_url")
    @classmethod
    def validate_calendar_url(cls, value: str) -> str:
        """Validate the TrainerRoad calendar feed URL looks like an HTTP(S) URL."""
        if value and not value.startswith(("http://", "https://", "webcal://")):
            logger.warning(f"TRAINERROAD_CALENDAR_URL does not look like a URL: {value}. TrainerRoad workouts may not load.")
        return value

    @property
    def intervals_configured(self) -> bool:
        return bool(self.intervals_api_key and self.intervals_athlete_id)

    @property
    def whoop_configured(self) -> bool:
        """Whoop needs the OAuth client plus at least one token to bootstrap from."""
        has_client = bool(self.whoop_client_id and self.whoop_client_secret)
        has_token = bool(self.whoop_access_token or self.whoop_refresh_token)
        return has_client and has_token

    @property
    def trainerroad_configured(self) -> bool:
        return bool(self.trainerroad_calendar_url)


settings = Settings()
