from typing import Optional

class StencilError(Exception):
    """base class for exceptions in Stencil."""
    pass

class NoVersionsFoundError(StencilError):
    """raised when a package exists in a source but has no published versions."""
    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"No versions found for package '{package_name}'")

class TransportError(StencilError):
    """raised when the catalog could not be reached or answered with an error status."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

class MalformedResponseError(StencilError):
    """raised when a catalog response lacks an expected field or has the wrong shape."""
    pass

class PackageNotFoundError(StencilError):
    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package '{package_name}' not found")

class VersionNotFoundError(StencilError):
    def __init__(self, package_name: str, version: str):
        self.package_name = package_name
        self.version = version
        super().__init__(f"Version {version} not found for package '{package_name}'")
