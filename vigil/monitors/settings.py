"""Settings snapshot saved for each registered monitor."""

from pydantic import BaseModel, Field


class LevelSetting(BaseModel):
    """Serialized form of a LevelEntry."""

    level: str
    environment: str | None = None


class MonitorSettings(BaseModel):
    """Read-only view of a monitor's definition, stored at registration time."""

    name: str = Field(min_length=1)
    description: str | None = None
    notify_after: int = Field(ge=1)
    then_notify_every: int = Field(ge=1)
    environments: list[str] = Field(default_factory=list)
    levels: list[LevelSetting] = Field(default_factory=list)
