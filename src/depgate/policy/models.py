"""Policy models - allow/prohibit modes and the loaded policy table."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field
from ..ingest.models import PackageRef
from ..ingest.version import WILDCARD
from ..utils.errors import ConfigError


class PolicyMode(str, Enum):
    """How the policy table is applied to referenced packages."""
    ALLOW = "allow"
    PROHIBIT = "prohibit"


def resolve_policy_mode(value: object) -> PolicyMode:
    """
    Convert a configured policy value to a PolicyMode.

    Raises:
        ConfigError: If value is not "allow" or "prohibit"
    """
    try:
        return PolicyMode(value)
    except ValueError:
        raise ConfigError("policy must be set to 'allow' or 'prohibit'")


class PolicyTable(BaseModel):
    """Ordered policy entries, read-only once loaded."""

    entries: List[PackageRef] = Field(default_factory=list, description="Policy entries in document order")
    source: Optional[str] = Field(None, description="Where the policy was loaded from")

    class Config:
        frozen = True

    def __len__(self) -> int:
        return len(self.entries)

    def wildcard_names(self) -> List[str]:
        """Names whose policy entry matches any version."""
        return [entry.name for entry in self.entries if entry.version == WILDCARD]
