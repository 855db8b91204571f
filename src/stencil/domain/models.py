from enum import Enum, auto
from typing import Any, List, NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator

class PackageInfo(BaseModel):
    """describes one resolvable template package."""
    # back-reference to the PackageSource that produced this info
    source: Any = Field(default=None, exclude=True, repr=False)
    name: str
    latest_version: str
    versions: List[str] = Field(default_factory=list)
    owner: Optional[str] = None
    description: Optional[str] = None
    info_url: Optional[str] = None

    @field_validator("latest_version")
    @classmethod
    def _require_latest_version(cls, value: str) -> str:
        if not value:
            raise ValueError("a package must have a latest version")
        return value

    def template_url(self, version: Optional[str] = None) -> str:
        """download location of the given version (latest by default) in the producing source."""
        if self.source is None:
            raise ValueError(f"Package '{self.name}' is not attached to a package source")
        return self.source.get_template_url(self.name, version or self.latest_version)

class LookupOutcome(Enum):
    FOUND = auto()
    NOT_FOUND = auto()
    NO_VERSIONS = auto()
    ERROR = auto()

class PackageLookup(NamedTuple):
    outcome: LookupOutcome
    name: str
    info: Optional[PackageInfo] = None
    error: Optional[Exception] = None

    @property
    def found(self) -> bool:
        return self.outcome is LookupOutcome.FOUND
