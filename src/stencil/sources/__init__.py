"""package sources that template packages can be resolved from."""
from .base import PackageSource
from .catalog import RemoteCatalogPackageSource
from .local import LocalPackageSource

SOURCE_KINDS = {
    "catalog": RemoteCatalogPackageSource,
    "local": LocalPackageSource,
}


def create_package_source(kind: str, **options) -> PackageSource:
    """build a package source of the given kind, e.g. ("catalog", repo_name=...)."""
    try:
        source_class = SOURCE_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown package source kind: {kind}")
    return source_class(**options)


__all__ = [
    "PackageSource",
    "RemoteCatalogPackageSource",
    "LocalPackageSource",
    "SOURCE_KINDS",
    "create_package_source",
]
