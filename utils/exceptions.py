""" Custom exceptions for the account loader """
from typing import Optional


class AccountsFetchException(Exception):
    """Exception raised when the accounts table cannot be read."""
    def __init__(self, message: str):
        """
        Initializes the AccountsFetchException.

        Arguments:
            message: The error message from the DynamoDB client.
        """
        self.general_message = "Error fetching account configurations"
        super().__init__(f"{self.general_message}: {message}")


class AccountDecodeException(Exception):
    """Exception raised when a stored record does not match the account schema."""
    def __init__(self, message: str, entry_id: Optional[str] = None, field_name: Optional[str] = None):
        """
        Initializes the AccountDecodeException.

        Arguments:
            message: explanation of the error.
            entry_id: The EntryID of the offending record, if it has one.
            field_name: The storage name of the first attribute that failed to decode.
        """
        self.general_message = "Error decoding account configuration"
        self.entry_id = entry_id
        self.field_name = field_name
        super().__init__(f"{self.general_message}: {message}")


class AccountValidationException(Exception):
    """Exception raised when a required account field is missing."""
    def __init__(self, message: str, field_name: str, entry_id: Optional[str] = None):
        """
        Initializes the AccountValidationException.

        Arguments:
            message: explanation of the error.
            field_name: The first required field found missing.
            entry_id: The EntryID of the offending entry, if it has one.
        """
        self.general_message = "Account validation error"
        self.field_name = field_name
        self.entry_id = entry_id
        super().__init__(f"{self.general_message}: {message}")


class SettingsException(Exception):
    """Exception raised for invalid startup settings."""
    def __init__(self, message: str):
        self.general_message = "Invalid settings"
        super().__init__(f"{self.general_message}: {message}")
