"""Configuration models for Helpdesk."""

from pydantic import BaseModel, Field, model_validator

from helpdesk.config.settings import SettingsConfig

SUPPORTED_VERSIONS = frozenset({"1.0"})
CURRENT_VERSION = "1.0"


class HelpdeskConfig(BaseModel):
    """A helpdesk bound to one channel."""

    channel_id: int = Field(description="Channel the helpdesk listens in")
    guild_id: int = Field(description="Guild owning the channel")
    model: str = Field(description="Path to the dialogue tree YAML file")
    name: str = Field(default="", description="Display name")


class AppConfig(BaseModel):
    """Root configuration model."""

    version: str = Field(default=CURRENT_VERSION, description="Config format version")
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    helpdesks: list[HelpdeskConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_version_and_channels(self) -> "AppConfig":
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version '{self.version}'. "
                f"Supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        seen: set[int] = set()
        for helpdesk in self.helpdesks:
            if helpdesk.channel_id in seen:
                raise ValueError(f"Channel {helpdesk.channel_id} has more than one helpdesk")
            seen.add(helpdesk.channel_id)
        return self
