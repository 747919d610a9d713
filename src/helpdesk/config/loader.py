"""Config loader for YAML configuration files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from helpdesk.config.models import AppConfig
from helpdesk.core.errors import ConfigError
from helpdesk.tree.loader import TreeLoader
from helpdesk.tree.models import DialogueTree

CONFIG_FILE_NAMES = ("helpdesk.yaml", "config.yaml")


class ConfigLoader:
    """Load AppConfig from YAML files."""

    @staticmethod
    def resolve(path: Path | str) -> Path:
        """Find the config file for a file or directory path."""
        config_path = Path(path)
        if config_path.is_dir():
            for name in CONFIG_FILE_NAMES:
                candidate = config_path / name
                if candidate.exists():
                    return candidate
            raise FileNotFoundError(f"No config files found in {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    @staticmethod
    def load(path: Path | str) -> AppConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to config directory or helpdesk.yaml file

        Returns:
            Parsed AppConfig instance
        """
        yaml_file = ConfigLoader.resolve(path)

        with open(yaml_file, encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        try:
            return AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration in {yaml_file}: {e}") from e

    @staticmethod
    def load_trees(config: AppConfig, base_dir: Path | str) -> dict[int, DialogueTree]:
        """Load every helpdesk's tree, keyed by channel id.

        Tree paths are resolved relative to base_dir (the config file's directory).
        """
        base = Path(base_dir)
        trees: dict[int, DialogueTree] = {}
        for helpdesk in config.helpdesks:
            tree_path = Path(helpdesk.model)
            if not tree_path.is_absolute():
                tree_path = base / tree_path
            trees[helpdesk.channel_id] = TreeLoader.load(tree_path)
        return trees
