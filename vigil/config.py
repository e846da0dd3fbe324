from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from VIGIL_* environment variables or a .env file.

    ``recipients`` maps a criticality level to a recipient and is read as
    JSON, e.g. VIGIL_RECIPIENTS='{"critical": "oncall@example.com"}'.
    """

    model_config = SettingsConfigDict(env_prefix="VIGIL_", env_file=".env", extra="ignore")

    # Redis (None -> in-memory store)
    redis_url: str | None = None
    key_prefix: str = "vigil"

    # Escalation defaults
    notify_after: int = Field(default=1, ge=1)
    then_notify_every: int = Field(default=1, ge=1)

    # Level -> recipient
    recipients: dict[str, str] = Field(default_factory=dict)

    # SMTP (email channel is enabled when smtp_host is set)
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_sender: str = "monitors@localhost"
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True

    # Webhook
    webhook_timeout_seconds: float = Field(default=10.0, gt=0)

    # App
    log_level: str = "INFO"
