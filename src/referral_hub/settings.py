"""Application settings and configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "referral-hub"
    env: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"  # "json" in deployed environments
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origins: str = "*"

    # Database
    database_url: str = "sqlite:///./referrals.db"

    # Public site, used for call-to-action links in emails
    website_url: str = "https://example.com"

    # Mail relay
    mail_transport: str = "smtp"  # smtp, sendgrid or console
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    email_user: str | None = None
    email_pass: str | None = None
    mail_from_name: str = "The Education Team"
    sendgrid_api_key: str | None = None

    @property
    def is_production(self) -> bool:
        return self.env == "production"


# Global settings instance
settings = Settings()
