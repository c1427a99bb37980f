"""Version templating for tool-support sources.

Tool-support sources may embed the versions of packages in the active graph
using ``{{version:<package>}}`` placeholders. Write ``{{{{`` for a literal
``{{``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from collections.abc import Mapping

from .errors import PreprocessError

# (text, package name -> version, source url) -> processed text
Preprocessor = Callable[[str, Mapping[str, str], str], str]

_PLACEHOLDER_RE = re.compile(r"\{\{\{\{|\{\{\s*version:\s*(?P<package>[A-Za-z0-9_.\-]+)\s*\}\}")


def substitute_versions(text: str, versions: Mapping[str, str], source_url: str) -> str:
    """Replace version placeholders with versions from the package graph.

    Args:
        text: Source text
        versions: Map of package name to version
        source_url: Location of the source, used in error messages

    Returns:
        Text with every placeholder replaced

    Raises:
        PreprocessError: A placeholder names a package not in ``versions``
    """

    def _replace(match: re.Match[str]) -> str:
        package = match.group("package")
        if package is None:
            return "{{"
        if package not in versions:
            raise PreprocessError(f"no version for package '{package}'", source_url)
        return versions[package]

    return _PLACEHOLDER_RE.sub(_replace, text)
