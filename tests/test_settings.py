"""Tests for provider settings loading."""

from pathlib import Path
from textwrap import dedent

from asset_provider.settings import ProviderSettings
from asset_provider.settings import SettingsManager


def _manager(tmp_path: Path) -> SettingsManager:
    return SettingsManager(settings_dir=tmp_path / "project", user_dir=tmp_path / "user")


def test_defaults_without_files(tmp_path: Path):
    settings = _manager(tmp_path).load(environ={})

    assert settings == ProviderSettings()
    assert settings.engine_package == "assetgraph"
    assert settings.source_extension == ".py"


def test_scopes_merge_in_precedence_order(tmp_path: Path):
    manager = _manager(tmp_path)
    manager.user_settings_file.parent.mkdir(parents=True)
    manager.user_settings_file.write_text(dedent("""
        provider:
          engine_package: user-engine
          source_extension: .pyi
    """))
    manager.project_settings_file.parent.mkdir(parents=True)
    manager.project_settings_file.write_text(dedent("""
        provider:
          engine_package: project-engine
    """))
    manager.local_settings_file.write_text(dedent("""
        provider:
          platform_root: /opt/platform
    """))

    settings = manager.load(environ={})

    assert settings.engine_package == "project-engine"
    assert settings.source_extension == ".pyi"
    assert settings.platform_root == Path("/opt/platform")


def test_environment_overrides_files(tmp_path: Path):
    manager = _manager(tmp_path)
    manager.project_settings_file.parent.mkdir(parents=True)
    manager.project_settings_file.write_text("provider:\n  engine_package: project-engine\n")

    settings = manager.load(
        environ={
            "ASSET_PROVIDER_ENGINE_PACKAGE": "env-engine",
            "ASSET_PROVIDER_INSTALL_CONTEXT": "tool_checkout",
        }
    )

    assert settings.engine_package == "env-engine"
    assert settings.install_context == "tool_checkout"


def test_unreadable_file_is_skipped(tmp_path: Path):
    manager = _manager(tmp_path)
    manager.project_settings_file.parent.mkdir(parents=True)
    manager.project_settings_file.write_text("provider: [unclosed")

    assert manager.load(environ={}) == ProviderSettings()
