"""Environment introspection for platform-library resolution.

Detects how the provider is running and picks the physical layout of the
platform's standard-library sources once, at start-up:
- installed: regular (non-editable) install -> sources read directly
- platform_checkout: interpreter running from its own build tree -> direct,
  reading the source tree's Lib directory
- tool_checkout: editable/development install of this tool -> archived copy
"""

import importlib.metadata
import json
import logging
import sys
import sysconfig
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from pathlib import PurePosixPath

from .errors import EnvironmentConfigError
from .settings import InstallContext
from .settings import ProviderSettings

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "pkg-asset-provider"

# Directory inside the archive package holding the compressed platform tree
ARCHIVE_TREE = "platform"


class PlatformMode(str, Enum):
    """Physical layout of platform-library sources."""

    DIRECT = "direct"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class PlatformLayout:
    """Platform-library layout chosen for the lifetime of the process.

    Attributes:
        mode: Direct or archived
        root: Installed platform root (direct mode)
        archive_root: Root of the secondary archive package (archived mode)
        library_name: Name of the sources directory under root (direct mode)
    """

    mode: PlatformMode
    root: Path | None = None
    archive_root: Path | None = None
    library_name: str = "lib"

    def __post_init__(self):
        if self.mode is PlatformMode.DIRECT and self.root is None:
            raise ValueError("Direct platform layout needs a root")
        if self.mode is PlatformMode.ARCHIVED and self.archive_root is None:
            raise ValueError("Archived platform layout needs an archive_root")

    @property
    def library_dir(self) -> Path:
        """Directory whose tree is exposed under the platform namespace."""
        if self.mode is PlatformMode.ARCHIVED:
            return self.archive_root / ARCHIVE_TREE
        return self.root / self.library_name

    @classmethod
    def direct(cls, root: Path, library_name: str = "lib") -> "PlatformLayout":
        return cls(mode=PlatformMode.DIRECT, root=Path(root), library_name=library_name)

    @classmethod
    def archived(cls, archive_root: Path) -> "PlatformLayout":
        return cls(mode=PlatformMode.ARCHIVED, archive_root=Path(archive_root))


def detect_install_context(settings: ProviderSettings | None = None) -> InstallContext:
    """Detect how the provider is running.

    An explicit ``install_context`` setting wins. Otherwise an interpreter
    built in-tree means a platform checkout, an editable install (or no
    install metadata at all) means a tool checkout, and anything else is a
    regular install.
    """
    if settings is not None and settings.install_context:
        return settings.install_context

    if sysconfig.is_python_build():
        return "platform_checkout"

    try:
        dist = importlib.metadata.distribution(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        logger.debug(f"{DISTRIBUTION_NAME} not installed - assuming source checkout")
        return "tool_checkout"

    return "tool_checkout" if _is_editable_install(dist) else "installed"


def detect_platform_layout(settings: ProviderSettings | None = None) -> PlatformLayout:
    """Select the platform layout. Call once during initialization.

    Raises:
        EnvironmentConfigError: Archived mode selected but no archive located
    """
    settings = settings or ProviderSettings()
    context = detect_install_context(settings)

    if context == "tool_checkout":
        archive_root = settings.platform_archive_root or _locate_archive_root(settings.platform_archive_package)
        if archive_root is None:
            raise EnvironmentConfigError(
                f"Running from a development checkout but the platform archive package "
                f"'{settings.platform_archive_package}' is not installed or holds no '{ARCHIVE_TREE}' tree.\n"
                f"Install it, or set ASSET_PROVIDER_PLATFORM_ARCHIVE_ROOT to an archive directory."
            )
        layout = PlatformLayout.archived(archive_root)
    elif settings.platform_root:
        layout = PlatformLayout.direct(settings.platform_root)
    elif context == "platform_checkout" and (source_tree := _python_source_tree()) is not None:
        layout = PlatformLayout.direct(source_tree, library_name="Lib")
    else:
        layout = PlatformLayout.direct(Path(sys.base_prefix))

    logger.info(f"[platform:layout] context={context} mode={layout.mode.value} dir={layout.library_dir}")
    return layout


def _is_editable_install(dist) -> bool:
    """Check for direct_url.json with editable=true."""
    try:
        direct_url_text = dist.read_text("direct_url.json")
    except OSError:
        return False
    if not direct_url_text:
        return False

    try:
        direct_url = json.loads(direct_url_text)
    except json.JSONDecodeError:
        logger.debug(f"Malformed direct_url.json for {dist.metadata['Name']}")
        return False
    return bool(direct_url.get("dir_info", {}).get("editable"))


def _python_source_tree() -> Path | None:
    """Source checkout of an interpreter built in-tree, or None."""
    srcdir = sysconfig.get_config_var("srcdir")
    if srcdir and (Path(srcdir) / "Lib").is_dir():
        return Path(srcdir)
    return None


def _locate_archive_root(name: str) -> Path | None:
    """Directory of an installed distribution that contains its archive tree, or None."""
    try:
        dist = importlib.metadata.distribution(name)
    except importlib.metadata.PackageNotFoundError:
        return None

    for file in dist.files or []:
        parts = PurePosixPath(str(file)).parts
        if ARCHIVE_TREE in parts[:-1]:
            package_dir = PurePosixPath(*parts[: parts.index(ARCHIVE_TREE)])
            return Path(str(dist.locate_file(package_dir)))
    return None
