"""Exception types raised by the asset provider.

Only AssetNotFoundError is an expected, recoverable outcome. The remaining
types signal caller mistakes or a broken environment and should surface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import AssetId


class AssetProviderError(Exception):
    """Base class for asset provider errors."""


class AssetNotFoundError(AssetProviderError):
    """Raised when the physical file behind an asset id does not exist."""

    def __init__(self, id: AssetId):
        self.id = id
        super().__init__(f"Could not find asset {id}.")


class InvalidAssetIdError(AssetProviderError, ValueError):
    """Raised when an asset id violates its namespace's path-shape contract."""

    def __init__(self, id: AssetId | str, reason: str):
        self.id = id
        self.reason = reason
        super().__init__(f"Invalid asset id {id}: {reason}")


class UnknownPackageError(InvalidAssetIdError):
    """Raised when an id names a package this provider does not serve."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(package, f"package '{package}' is not provided")


class PackageGraphError(AssetProviderError):
    """Raised when a package graph manifest cannot be loaded."""


class EnvironmentConfigError(AssetProviderError):
    """Raised when the platform layout cannot be determined at start-up."""


class PreprocessError(AssetProviderError):
    """Raised when version templating fails for a tool-support source."""

    def __init__(self, message: str, source_url: str):
        self.source_url = source_url
        super().__init__(f"{source_url}: {message}")
