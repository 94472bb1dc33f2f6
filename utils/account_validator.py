""" Validation and defaulting of account configuration entries """
from dataclasses import dataclass, field
from typing import Iterable, List, Union

from pydantic import ValidationError

from models.account_entry import (
    DEFAULT_ALLOW_PORTS,
    DEFAULT_DESCRIPTION,
    DEFAULT_DURATION_SECONDS,
    DEFAULT_EXCLUSIVE_TAG_VALUES,
    DEFAULT_MANAGED_TAG_VALUES,
    DEFAULT_ROLE_NAME,
    DEFAULT_SESSION_NAME,
    DEFAULT_TAG_NAME,
    AccountCandidate,
    AccountEntry,
)
from scripts.logging_config import FieldsLogger, with_fields
from utils.exceptions import AccountValidationException


@dataclass
class ValidationReport:
    """Outcome of validating a batch of candidates"""
    accounts: List[AccountEntry] = field(default_factory=list)
    failures: List[AccountValidationException] = field(default_factory=list)


def validate_account(
    candidate: Union[AccountCandidate, AccountEntry], logger: FieldsLogger
) -> AccountEntry:
    """Checks the required fields of an account and fills in defaults for the rest.

    AccountID is checked before Regions and only the first missing field is
    reported. Passing an already validated AccountEntry returns an equal entry.

    Args:
        candidate: The decoded account configuration.
        logger: Logger used to report the rejection reason.

    Raises:
        AccountValidationException: If AccountID or Regions is missing.

    Returns:
        AccountEntry: The account with every optional field populated.
    """
    entry_id = candidate.entry_id or None
    log = with_fields(logger, entryID=entry_id, accountID=candidate.account_id or "")

    if not candidate.account_id:
        _reject(log, "Account ID cannot be empty", "AccountID", entry_id)

    if not candidate.regions:
        _reject(log, "You must specify at least 1 region for an account", "Regions", entry_id)

    try:
        return AccountEntry(
            account_id=candidate.account_id,
            regions=tuple(candidate.regions),
            allow_ports=candidate.allow_ports or DEFAULT_ALLOW_PORTS,
            role_name=candidate.role_name or DEFAULT_ROLE_NAME,
            session_name=candidate.session_name or DEFAULT_SESSION_NAME,
            duration_seconds=candidate.duration_seconds or DEFAULT_DURATION_SECONDS,
            tag_name=candidate.tag_name or DEFAULT_TAG_NAME,
            exclusive_tag_values=candidate.exclusive_tag_values or DEFAULT_EXCLUSIVE_TAG_VALUES,
            managed_tag_values=candidate.managed_tag_values or DEFAULT_MANAGED_TAG_VALUES,
            description=candidate.description or DEFAULT_DESCRIPTION,
            entry_id=entry_id,
            external_id=candidate.external_id or None,
        )
    except ValidationError as error:
        field_name = ".".join(str(part) for part in error.errors()[0]["loc"])
        _reject(log, f"Invalid value for {field_name}: {error}", field_name, entry_id)


def validate_accounts(
    candidates: Iterable[Union[AccountCandidate, AccountEntry]], logger: FieldsLogger
) -> ValidationReport:
    """Validates each candidate on its own; a rejected entry never stops the others."""
    report = ValidationReport()
    for candidate in candidates:
        try:
            report.accounts.append(validate_account(candidate, logger))
        except AccountValidationException as error:
            report.failures.append(error)
    return report


def _reject(log: FieldsLogger, message: str, field_name: str, entry_id) -> None:
    log.with_fields(field=field_name).error(message)
    raise AccountValidationException(message, field_name=field_name, entry_id=entry_id)
