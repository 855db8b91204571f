import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from packaging.version import InvalidVersion, Version

from ..domain.models import PackageInfo
from .base import PackageSource

# {name}-{version}.zip. the version is the last "-" segment made of dotted
# numbers, optionally followed by a qualifier such as "-rc1" or "-SNAPSHOT",
# so names may themselves contain digits: "foo-2d-1.0.zip" is foo-2d 1.0
ARCHIVE_PATTERN = re.compile(
    r"^(?P<name>.+)-(?P<version>\d+(?:\.\d+)*(?:[.+-]?[A-Za-z][A-Za-z0-9]*(?:\.\d+)*)?)\.zip$"
)


def _version_key(version: str) -> Tuple[int, Any]:
    try:
        return (1, Version(version))
    except InvalidVersion:
        return (0, version)


class LocalPackageSource(PackageSource):
    """package source reading template archives from a local directory."""

    def __init__(self, path):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def _scan(self) -> Dict[str, List[str]]:
        packages: Dict[str, List[str]] = {}
        if not self.path.is_dir():
            return packages

        for entry in sorted(self.path.iterdir()):
            match = ARCHIVE_PATTERN.match(entry.name)
            if entry.is_file() and match:
                packages.setdefault(match.group("name"), []).append(match.group("version"))
        return packages

    def get_package_count(self) -> int:
        return len(self._scan())

    def list_packages(self, options: Optional[Dict[str, Any]] = None) -> List[str]:
        """list package names, sorted. the "prefix" option filters by name prefix."""
        prefix = (options or {}).get("prefix", "")
        return sorted(name for name in self._scan() if name.startswith(prefix))

    def get_package(self, name: str) -> Optional[PackageInfo]:
        versions = self._scan().get(name)
        if not versions:
            return None

        versions = sorted(versions, key=_version_key)
        return PackageInfo(source=self, name=name, latest_version=versions[-1], versions=versions)

    def get_template_url(self, name: str, version: str) -> str:
        return (self.path.absolute() / f"{name}-{version}.zip").as_uri()
