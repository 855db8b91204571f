import logging
import shutil
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse
from urllib.request import url2pathname

from ..catalog.transport import CatalogTransport
from ..domain.errors import PackageNotFoundError, VersionNotFoundError
from ..domain.models import PackageInfo
from ..sources.base import PackageSource
from ..sources.catalog import default_transport
from ..templates.store import TemplateStore
from ..ui.progress import ProgressManager

logger = logging.getLogger(__name__)


class FetchService:
    """resolves template packages and downloads their archives into a local store."""

    def __init__(
        self,
        source: PackageSource,
        store: TemplateStore,
        downloader: Optional[CatalogTransport] = None,
        progress_manager: Optional[ProgressManager] = None,
    ):
        self.source = source
        self.store = store
        self.downloader = downloader or default_transport()
        self.progress_manager = progress_manager or ProgressManager()

    def resolve(self, package_name: str, version: Optional[str] = None) -> Tuple[PackageInfo, str]:
        """
        find the package and the version to use.

        args:
            package_name: name of the package
            version: optional specific version, latest if omitted

        raises:
            PackageNotFoundError: the source does not host the package
            VersionNotFoundError: the requested version is not published
        """
        info = self.source.get_package(package_name)
        if info is None:
            raise PackageNotFoundError(package_name)

        if not version:
            return info, info.latest_version

        if info.versions and version not in info.versions:
            raise VersionNotFoundError(package_name, version)
        return info, version

    def fetch(self, package_name: str, version: Optional[str] = None) -> Path:
        """download a template archive unless the store already has it. returns its path."""
        with self.progress_manager.querying(self.source.name, package_name):
            info, target_version = self.resolve(package_name, version)

        if self.store.has_archive(info.name, target_version):
            logger.debug(f"{info.name} {target_version} already in {self.store.root}")
            return self.store.archive_path(info.name, target_version)

        url = self.source.get_template_url(info.name, target_version)
        with self.store.staging(info.name, target_version) as part_path:
            if urlparse(url).scheme == "file":
                shutil.copyfile(url2pathname(urlparse(url).path), part_path)
            else:
                with self.progress_manager.downloading(f"{info.name} {target_version}") as report:
                    self.downloader.download(url, part_path, on_progress=report)

        return self.store.archive_path(info.name, target_version)
