"""Settings configuration models.

Global settings for session timeouts, temporary roles, logging and the
emojis used to number choices.
"""

from typing import Literal

from pydantic import BaseModel, Field

from helpdesk.core.constants import DEFAULT_DIGIT_EMOJIS, DIGIT_NAMES

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class EmojiConfig(BaseModel):
    """Glyph used for each decimal digit when numbering choices."""

    zero: str = DEFAULT_DIGIT_EMOJIS[0]
    one: str = DEFAULT_DIGIT_EMOJIS[1]
    two: str = DEFAULT_DIGIT_EMOJIS[2]
    three: str = DEFAULT_DIGIT_EMOJIS[3]
    four: str = DEFAULT_DIGIT_EMOJIS[4]
    five: str = DEFAULT_DIGIT_EMOJIS[5]
    six: str = DEFAULT_DIGIT_EMOJIS[6]
    seven: str = DEFAULT_DIGIT_EMOJIS[7]
    eight: str = DEFAULT_DIGIT_EMOJIS[8]
    nine: str = DEFAULT_DIGIT_EMOJIS[9]

    def as_table(self) -> tuple[str, ...]:
        """Digit lookup table, indexed by digit value."""
        return tuple(getattr(self, name) for name in DIGIT_NAMES)


class SettingsConfig(BaseModel):
    """Global settings configuration."""

    expire_minutes: float = Field(
        default=5.0, gt=0, description="How long each prompt waits for a reply"
    )
    temporary_role_minutes: float = Field(
        default=60.0, gt=0, description="How long a granted role is kept"
    )
    role_sweep_seconds: float = Field(
        default=30.0, gt=0, description="How often expired roles are removed"
    )
    log_level: LogLevel = Field(default="INFO", description="Log level for the helpdesk logger")
    log_file: str | None = Field(default=None, description="Optional rotating JSON log file")
    emojis: EmojiConfig = Field(default_factory=EmojiConfig)

    @property
    def timeout_seconds(self) -> float:
        return self.expire_minutes * 60
