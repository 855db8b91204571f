from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..domain.errors import NoVersionsFoundError, TransportError
from ..domain.models import LookupOutcome, PackageInfo, PackageLookup

class PackageSource(ABC):
    """a place template packages can be resolved from."""

    @property
    @abstractmethod
    def name(self) -> str:
        """identifier of the repository backing this source."""
        pass

    def get_name(self) -> str:
        return self.name

    @abstractmethod
    def get_package_count(self) -> int:
        """Get the total number of packages the source reports."""
        pass

    @abstractmethod
    def list_packages(self, options: Optional[Dict[str, Any]] = None) -> List[str]:
        """Get the names of all available packages, without any source-specific suffix."""
        pass

    @abstractmethod
    def get_package(self, name: str) -> Optional[PackageInfo]:
        """
        Get information about a package.

        returns None if this source does not host the package.

        raises:
            NoVersionsFoundError: the package exists but has no published versions
            TransportError: the source could not be queried
        """
        pass

    @abstractmethod
    def get_template_url(self, name: str, version: str) -> str:
        """Build the download location of a package archive. Performs no I/O."""
        pass

    def has_package(self, name: str) -> bool:
        # errors from get_package propagate: "could not tell" is not "no"
        return self.get_package(name) is not None

    def lookup_package(self, name: str) -> PackageLookup:
        """resolve a package into an explicit found / not found / no versions / error outcome."""
        try:
            info = self.get_package(name)
        except NoVersionsFoundError as e:
            return PackageLookup(LookupOutcome.NO_VERSIONS, name, error=e)
        except TransportError as e:
            return PackageLookup(LookupOutcome.ERROR, name, error=e)

        if info is None:
            return PackageLookup(LookupOutcome.NOT_FOUND, name)
        return PackageLookup(LookupOutcome.FOUND, name, info=info)
