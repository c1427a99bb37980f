"""Settings for the asset provider.

Reads the "provider" section of three settings scopes:
- User global (~/.asset-provider/settings.yaml)
- Project (.asset-provider/settings.yaml)
- Local (.asset-provider/settings.local.yaml)

Environment variables (ASSET_PROVIDER_<FIELD>) override every file.
"""

import logging
import os
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

ENV_PREFIX = "ASSET_PROVIDER_"

InstallContext = Literal["installed", "platform_checkout", "tool_checkout"]


class ProviderSettings(BaseModel):
    """Effective provider configuration."""

    # Package whose presence in the graph means transform code will be loaded
    engine_package: str = "assetgraph"
    source_extension: str = ".py"
    platform_root: Path | None = None
    platform_archive_package: str = "asset-provider-platform-archive"
    platform_archive_root: Path | None = None
    install_context: InstallContext | None = None


class SettingsManager:
    """Loads ProviderSettings from settings files and the environment."""

    def __init__(self, settings_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            settings_dir: Directory for project/local settings (for testing).
                          If None, uses .asset-provider in current directory.
            user_dir: Directory for user settings (for testing).
                      If None, uses ~/.asset-provider.
        """
        if settings_dir is None:
            settings_dir = Path(".asset-provider")
        if user_dir is None:
            user_dir = Path.home() / ".asset-provider"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = settings_dir / "settings.yaml"
        self.local_settings_file = settings_dir / "settings.local.yaml"

    def load(self, environ: dict[str, str] | None = None) -> ProviderSettings:
        """Build effective settings.

        Merge order (later overrides earlier): user, project, local, environment.
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            settings = self._read_settings(path)
            if settings and isinstance(settings.get("provider"), dict):
                merged.update(settings["provider"])

        merged.update(self._read_environment(os.environ if environ is None else environ))
        return ProviderSettings(**merged)

    def _read_environment(self, environ) -> dict[str, str]:
        overrides = {}
        for field in ProviderSettings.model_fields:
            value = environ.get(f"{ENV_PREFIX}{field.upper()}")
            if value:
                overrides[field] = value
        return overrides

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None
