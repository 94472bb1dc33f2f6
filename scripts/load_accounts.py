""" Script to load and validate the account configurations of the security group updater """

import json
import sys
import time
from dataclasses import dataclass, field
from typing import List, Optional, Union

from pydantic import TypeAdapter

from config.settings import parse_flags, resolve_settings, version_string
from models.account_entry import AccountEntry
from scripts.logging_config import FieldsLogger, setup_logger, with_fields
from utils.account_repository import (
    STORAGE_NAMES,
    AccountRepository,
    decode_account_record,
    new_dynamodb_client,
)
from utils.account_validator import validate_accounts
from utils.exceptions import (
    AccountDecodeException,
    AccountsFetchException,
    AccountValidationException,
    SettingsException,
)

EXIT_OK = 0
EXIT_BAD_SETTINGS = 1
EXIT_FETCH_FAILED = 2
EXIT_REJECTED_ENTRIES = 3

_accounts_adapter = TypeAdapter(List[AccountEntry])


@dataclass
class LoadResult:
    """Validated accounts of one scan plus the records that were rejected"""
    accounts: List[AccountEntry] = field(default_factory=list)
    failures: List[Union[AccountDecodeException, AccountValidationException]] = field(default_factory=list)


def load_accounts(repository: AccountRepository, logger: FieldsLogger) -> LoadResult:
    """Fetches every stored account configuration, then decodes and validates each one.

    Args:
        repository (AccountRepository): Source of the raw records.
        logger (FieldsLogger): Logger for per-record rejections.

    Raises:
        AccountsFetchException: If the table cannot be read. The whole load is aborted.

    Returns:
        LoadResult: The valid accounts and the per-record failures.
    """
    records = repository.fetch_all()
    result = LoadResult()

    candidates = []
    for record in records:
        try:
            candidates.append(decode_account_record(record))
        except AccountDecodeException as error:
            with_fields(logger, entryID=error.entry_id, field=error.field_name).error(str(error))
            result.failures.append(error)

    report = validate_accounts(candidates, logger)
    result.accounts.extend(report.accounts)
    result.failures.extend(report.failures)

    logger.info(f"Loaded {len(result.accounts)} account configurations, rejected {len(result.failures)}")
    return result


def dump_accounts(accounts: List[AccountEntry]) -> str:
    """Renders the accounts as JSON keyed by the storage attribute names."""
    documents = [
        {STORAGE_NAMES[attr]: value for attr, value in document.items()}
        for document in _accounts_adapter.dump_python(accounts, mode="json")
    ]
    return json.dumps(documents, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    flags = parse_flags(argv)
    if flags.pop("version", False):
        print(version_string())
        return EXIT_OK

    try:
        settings = resolve_settings(flags)
    except SettingsException as error:
        print(f"ERROR: {error}", file=sys.stderr)
        return EXIT_BAD_SETTINGS

    logger = setup_logger("load_accounts", debug=settings.DEBUG)
    logger.debug("Starting account configuration load")
    start_time = time.time()

    try:
        client = new_dynamodb_client(settings.AWS_REGION, logger)
        repository = AccountRepository(client, settings.ACCOUNTS_TABLE, logger)
        result = load_accounts(repository, logger)
    except AccountsFetchException as error:
        logger.error(error)
        return EXIT_FETCH_FAILED

    print(dump_accounts(result.accounts))
    logger.debug(f"Execution time: {time.time() - start_time:.4f} seconds")

    if result.failures and settings.STRICT:
        logger.error(f"{len(result.failures)} account configurations were rejected")
        return EXIT_REJECTED_ENTRIES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
