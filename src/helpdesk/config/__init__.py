"""Configuration module for Helpdesk."""

from helpdesk.config.loader import ConfigLoader
from helpdesk.config.models import AppConfig, HelpdeskConfig
from helpdesk.config.settings import EmojiConfig, SettingsConfig

__all__ = ["AppConfig", "HelpdeskConfig", "SettingsConfig", "EmojiConfig", "ConfigLoader"]
