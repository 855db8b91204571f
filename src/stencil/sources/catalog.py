import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..catalog.transport import CatalogTransport
from ..config import load_system_proxy
from ..domain.errors import MalformedResponseError, NoVersionsFoundError, TransportError
from ..domain.models import PackageInfo
from .base import PackageSource

logger = logging.getLogger(__name__)

API_BASE_URL = "https://bintray.com/api/v1"
TEMPLATE_BASE_URL = "https://dl.bintray.com/v1/content"
PACKAGE_SUFFIX = "-template"


def _strip_suffix(name: str) -> str:
    if name.endswith(PACKAGE_SUFFIX):
        return name[:-len(PACKAGE_SUFFIX)]
    return name


def _version_string(package_name: str, value: Any) -> str:
    # some catalogs report plain numbers, e.g. 2 rather than "2"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise MalformedResponseError(f"package '{package_name}' has an invalid version: {value!r}")


def default_transport() -> CatalogTransport:
    """
    build the catalog transport, routed through a proxy if one is configured.

    the secure proxy takes precedence over the plain one. certificate
    validation is relaxed only when going through the secure proxy.
    """
    proxy = load_system_proxy(True) or load_system_proxy(False)
    verify = not (proxy is not None and proxy.secure)
    return CatalogTransport(API_BASE_URL, proxy=proxy, verify=verify)


class RemoteCatalogPackageSource(PackageSource):
    """
    package source backed by a remote catalog's REST API.

    catalog entries are named after the template with a "-template" suffix,
    which distinguishes templates from other artifacts in the same repository.
    names going out to callers have the suffix stripped, and names going to
    the catalog have it appended.
    """

    def __init__(self, repo_name: str, transport: Optional[CatalogTransport] = None):
        self.repo_name = repo_name
        self.transport = transport or default_transport()

    @property
    def name(self) -> str:
        return self.repo_name

    def get_package_count(self) -> int:
        data = self.transport.get_json(f"/repos/{self.repo_name}")
        try:
            return int(data["package_count"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(
                f"repository '{self.repo_name}' metadata has no valid package_count"
            ) from e

    def list_packages(self, options: Optional[Dict[str, Any]] = None) -> List[str]:
        data = self.transport.get_json(f"/repos/{self.repo_name}/packages")
        if not isinstance(data, list):
            raise MalformedResponseError(f"package listing for '{self.repo_name}' is not a list")

        names = []
        for entry in data:
            name = entry.get("name") if isinstance(entry, dict) else None
            if not isinstance(name, str):
                raise MalformedResponseError(
                    f"package listing for '{self.repo_name}' has an entry without a name: {entry!r}"
                )
            if name.endswith(PACKAGE_SUFFIX):
                names.append(_strip_suffix(name))
        return names

    def get_package(self, name: str) -> Optional[PackageInfo]:
        """
        fetch package information from the catalog.

        returns None if the repository doesn't host the package. a 404 is the
        only failure handled here; every other transport error propagates.
        """
        pkg_name_with_suffix = name + PACKAGE_SUFFIX

        try:
            data = self.transport.get_json(f"/packages/{self.repo_name}/{pkg_name_with_suffix}")
        except TransportError as e:
            if e.status_code != 404:
                raise
            logger.debug(f"package {pkg_name_with_suffix} not found in {self.repo_name}")
            return None

        if not isinstance(data, dict):
            raise MalformedResponseError(f"details of package '{name}' are not a JSON object")

        # a package with no published versions has a null latest_version
        latest_version = data.get("latest_version")
        if not latest_version:
            raise NoVersionsFoundError(name)

        versions = data.get("versions") or []
        if not isinstance(versions, list):
            raise MalformedResponseError(f"versions of package '{name}' is not a list")

        catalog_name = data.get("name") or pkg_name_with_suffix
        if not isinstance(catalog_name, str):
            raise MalformedResponseError(f"package '{name}' has an invalid name: {catalog_name!r}")

        try:
            return PackageInfo(
                source=self,
                name=_strip_suffix(catalog_name),
                latest_version=_version_string(name, latest_version),
                versions=[_version_string(name, v) for v in versions],
                owner=data.get("owner"),
                description=data.get("desc") or None,
                info_url=data.get("desc_url"),
            )
        except ValidationError as e:
            raise MalformedResponseError(f"details of package '{name}' are malformed: {e}") from e

    def get_template_url(self, name: str, version: str) -> str:
        pkg_name_with_suffix = name + PACKAGE_SUFFIX
        return f"{TEMPLATE_BASE_URL}/{self.repo_name}/{pkg_name_with_suffix}-{version}.zip"
