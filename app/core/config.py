from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://carbon:carbon@db:5432/carbon_coach"
    APP_ENV: str = "development"
    SECRET_KEY: str = "changeme-secret-key"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # Time zone used to truncate recorded_at timestamps to calendar days.
    # Must match the zone timestamps are stored in.
    REPORT_TIMEZONE: str = "UTC"

    # Emission factors (kg CO2 per unit of activity)
    DRIVING_FACTOR_KG_PER_KM: float = 0.180
    ELECTRICITY_FACTOR_KG_PER_KWH: float = 0.300

    # Grid operator feed used by the daily ingestion job
    GRID_FEED_URL: str = "https://www.smartgriddashboard.com/api/chart/"
    GRID_REGION: str = "ALL"
    GRID_FEED_TIMEOUT: float = 10.0

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
