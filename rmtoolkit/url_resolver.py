"""Resolve ``file://`` and ``package://`` URLs into file system paths."""

from __future__ import annotations

import enum
import os
import re
from pathlib import Path
from typing import Callable

_FILE_PREFIX = "file:///"
_PACKAGE_PREFIX = "package://"
_ROS_HOME_VARIABLE = re.compile(r"\$\{ROS_HOME\}")


class UrlType(enum.Enum):
    EMPTY = 0
    FILE = 1
    PACKAGE = 2
    INVALID = 3


def _ros_home() -> str:
    ros_home = os.environ.get("ROS_HOME", "")
    if ros_home:
        return ros_home
    home = os.environ.get("HOME", "")
    if home:
        return home + "/.ros"
    return ""


def resolve_url(url: str) -> str:
    """Substitute ``${ROS_HOME}``; every other ``$`` is kept as it is."""
    return _ROS_HOME_VARIABLE.sub(lambda _match: _ros_home(), url)


def parse_url(url: str) -> UrlType:
    if url == "":
        return UrlType.EMPTY
    if url[: len(_FILE_PREFIX)].lower() == _FILE_PREFIX:
        return UrlType.FILE
    if url[: len(_PACKAGE_PREFIX)].lower() == _PACKAGE_PREFIX:
        # A non-empty package name must be followed by '/' and something after it.
        rest = url.find("/", len(_PACKAGE_PREFIX))
        if len(_PACKAGE_PREFIX) < rest < len(url) - 1:
            return UrlType.PACKAGE
    return UrlType.INVALID


def _ament_share_directory(package: str) -> str:
    """Find a package's share directory through the ament index on AMENT_PREFIX_PATH."""
    for prefix in os.environ.get("AMENT_PREFIX_PATH", "").split(os.pathsep):
        if not prefix:
            continue
        marker = Path(prefix, "share", "ament_index", "resource_index", "packages", package)
        if marker.is_file():
            return str(Path(prefix, "share", package))
    raise LookupError(f"package '{package}' not found")


def get_resolved_path(
    url: str, package_lookup: Callable[[str], str] | None = None
) -> str:
    """Return the file path a URL points to, or an empty string if it has none.

    ``package_lookup`` maps a package name to its share directory; by default the
    ament index is searched.
    """
    resolved = resolve_url(url)
    url_type = parse_url(url)
    if url_type is UrlType.FILE:
        return resolved[len("file://") :]
    if url_type is UrlType.PACKAGE:
        lookup = package_lookup or _ament_share_directory
        rest = resolved.find("/", len(_PACKAGE_PREFIX))
        package = resolved[len(_PACKAGE_PREFIX) : rest]
        package_path = lookup(package)
        if not package_path:
            return ""
        return package_path + resolved[rest:]
    return ""