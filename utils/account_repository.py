""" Reads account configurations from DynamoDB """
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from models.account_entry import AccountCandidate
from scripts.logging_config import FieldsLogger, with_fields
from utils.exceptions import AccountDecodeException, AccountsFetchException

# storage attribute name -> AccountCandidate field
STORAGE_FIELDS = {
    "EntryID": "entry_id",
    "AccountID": "account_id",
    "AllowPorts": "allow_ports",
    "Regions": "regions",
    "RoleName": "role_name",
    "SessionName": "session_name",
    "DurationSeconds": "duration_seconds",
    "ExternalID": "external_id",
    "TagName": "tag_name",
    "ExclusiveTagValues": "exclusive_tag_values",
    "ManagedTagValues": "managed_tag_values",
    "Description": "description",
}
STORAGE_NAMES = {attr: name for name, attr in STORAGE_FIELDS.items()}

_deserializer = TypeDeserializer()


def new_dynamodb_client(region: str, logger: FieldsLogger):
    """
    Creates a DynamoDB client in the given region.

    Raises:
        AccountsFetchException: If the client configuration cannot be loaded.
    """
    try:
        return boto3.client("dynamodb", region_name=region)
    except BotoCoreError as error:
        with_fields(logger, region=region).error(f"Failed to load DynamoDB client config: {error}")
        raise AccountsFetchException(f"cannot create DynamoDB client in {region}: {error}") from error


class AccountRepository:
    """Full-scan access to the table holding account configurations"""

    def __init__(self, client, table_name: str, logger: FieldsLogger, page_size: Optional[int] = None):
        self.client = client
        self.table_name = table_name
        self.logger = logger
        self.page_size = page_size

    def fetch_all(self) -> List[Dict[str, Any]]:
        """Scans the whole table and returns every record as plain Python values.

        Raises:
            AccountsFetchException: If the scan fails or returns malformed attribute
                values. Nothing from a failed scan is returned.

        Returns:
            list: One dict per stored record, keyed by storage attribute name.
        """
        log = with_fields(self.logger, dynamoTable=self.table_name)
        params: Dict[str, Any] = {"TableName": self.table_name}
        if self.page_size:
            params["PaginationConfig"] = {"PageSize": self.page_size}

        records: List[Dict[str, Any]] = []
        try:
            paginator = self.client.get_paginator("scan")
            for page in paginator.paginate(**params):
                records.extend(_deserialize_item(item) for item in page.get("Items", []))

        except (ClientError, BotoCoreError) as error:
            log.error(f"Failed to get accounts from DynamoDB: {error}")
            raise AccountsFetchException(str(error)) from error

        except (TypeError, ValueError, AttributeError) as error:
            log.error(f"Failed to parse list of accounts returned from DynamoDB: {error}")
            raise AccountsFetchException(f"malformed records in {self.table_name}: {error}") from error

        log.with_fields(count=len(records), accounts=records).debug(
            "Account configurations retrieved from DynamoDB"
        )
        return records


def decode_account_record(record: Dict[str, Any]) -> AccountCandidate:
    """
    Builds an AccountCandidate from a stored record. Unknown attributes are ignored.

    Raises:
        AccountDecodeException: If an attribute has the wrong type or range.
    """
    values = {attr: record[name] for name, attr in STORAGE_FIELDS.items() if name in record}
    try:
        return AccountCandidate(**values)
    except ValidationError as error:
        entry_id = record.get("EntryID")
        if not isinstance(entry_id, str):
            entry_id = None
        loc = error.errors()[0]["loc"]
        attr = loc[0] if loc else ""
        raise AccountDecodeException(
            f"record {entry_id or '<no EntryID>'} does not match the account schema: {error}",
            entry_id=entry_id,
            field_name=STORAGE_NAMES.get(attr, str(attr)),
        ) from error


def _deserialize_item(item: Dict[str, Any]) -> Dict[str, Any]:
    return {name: _to_python(_deserializer.deserialize(value)) for name, value in item.items()}


def _to_python(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (set, frozenset)):
        return sorted((_to_python(member) for member in value), key=str)
    if isinstance(value, list):
        return [_to_python(member) for member in value]
    if isinstance(value, dict):
        return {key: _to_python(member) for key, member in value.items()}
    return value
