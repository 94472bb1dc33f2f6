""" Models for account configuration entries """
from typing import Annotated, FrozenSet, Optional, Tuple

from pydantic import ConfigDict, Field, field_serializer
from pydantic.dataclasses import dataclass

DEFAULT_ALLOW_PORTS = frozenset({80, 443})
DEFAULT_ROLE_NAME = "STS-UpdateSonarCloudSecurityGroupsRole"
DEFAULT_SESSION_NAME = "UpdateSonarCloudSecurityGroupsFunction"
DEFAULT_DURATION_SECONDS = 1800  # 30 minutes
DEFAULT_TAG_NAME = "fn.imperva.com/UpdateSonarCloudSecurityGroups/state"
DEFAULT_EXCLUSIVE_TAG_VALUES = frozenset({"exclusive"})
DEFAULT_MANAGED_TAG_VALUES = frozenset({"managed"})
DEFAULT_DESCRIPTION = "Managed by UpdateSonarCloudSecurityGroups function (DO NOT MODIFY)"

Port = Annotated[int, Field(strict=True, ge=0, le=65535)]


@dataclass(config=ConfigDict(validate_assignment=True))
class AccountCandidate:
    """Account configuration as decoded from storage, before validation.

    Every field may be unset. ``None``, empty strings, empty collections and a
    zero ``duration_seconds`` all count as unset. Ports and durations must be
    real integers; booleans and numeric strings are rejected.
    """
    entry_id: Optional[str] = None
    account_id: Optional[str] = None
    allow_ports: Optional[FrozenSet[Port]] = None
    regions: Optional[Tuple[str, ...]] = None
    role_name: Optional[str] = None
    session_name: Optional[str] = None
    duration_seconds: Optional[Annotated[int, Field(strict=True, ge=0)]] = None
    external_id: Optional[str] = None
    tag_name: Optional[str] = None
    exclusive_tag_values: Optional[FrozenSet[str]] = None
    managed_tag_values: Optional[FrozenSet[str]] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class AccountEntry:
    """Class representing a validated AWS account the security group updater manages"""
    account_id: Annotated[str, Field(min_length=1)]
    regions: Annotated[Tuple[str, ...], Field(min_length=1)]
    allow_ports: Annotated[FrozenSet[Port], Field(min_length=1)] = DEFAULT_ALLOW_PORTS
    role_name: str = DEFAULT_ROLE_NAME
    session_name: str = DEFAULT_SESSION_NAME
    duration_seconds: Annotated[int, Field(strict=True, gt=0)] = DEFAULT_DURATION_SECONDS
    tag_name: str = DEFAULT_TAG_NAME
    exclusive_tag_values: Annotated[FrozenSet[str], Field(min_length=1)] = DEFAULT_EXCLUSIVE_TAG_VALUES
    managed_tag_values: Annotated[FrozenSet[str], Field(min_length=1)] = DEFAULT_MANAGED_TAG_VALUES
    description: str = DEFAULT_DESCRIPTION
    entry_id: Optional[str] = None
    external_id: Optional[str] = None

    @field_serializer("allow_ports", "exclusive_tag_values", "managed_tag_values")
    def serialize_sets(self, values: FrozenSet) -> list:
        return sorted(values)
