""" Module to resolve startup settings from flags and environment variables """
import argparse
from typing import Any, Dict, List, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.exceptions import SettingsException

APP_NAME = "account-config-loader"
VERSION = "0.1.0"
BUILD = "dev"
RELEASE_DATE = "unreleased"

TRUTHY_VALUES = {"1", "true", "enable", "enabled", "yes", "on"}


class Settings(BaseSettings):
    """Settings class resolved once at startup.

    Explicit init values (the command-line flags) win over environment
    variables, which win over the defaults declared here.
    """
    model_config = SettingsConfigDict(env_prefix='', frozen=True)

    ACCOUNTS_TABLE: str
    AWS_REGION: str = 'us-east-1'
    DEBUG: bool = False
    STRICT: bool = False

    @field_validator("DEBUG", "STRICT", mode="before")
    @classmethod
    def parse_switch(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUTHY_VALUES

    @field_validator("ACCOUNTS_TABLE", "AWS_REGION")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


def parse_flags(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    """Parses the command line, keeping only the flags that were actually given."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Load and validate the account configurations of the security group updater.",
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument("--accounts-table", dest="ACCOUNTS_TABLE",
                        help="DynamoDB table holding the account configurations")
    parser.add_argument("--region", dest="AWS_REGION", help="AWS region of the accounts table")
    parser.add_argument("--debug", dest="DEBUG", action="store_true", help="Enable debug logging")
    parser.add_argument("--strict", dest="STRICT", action="store_true",
                        help="Exit with an error when any account configuration is rejected")
    parser.add_argument("--version", dest="version", action="store_true", help="Show version information")
    return vars(parser.parse_args(argv))


def resolve_settings(flags: Dict[str, Any]) -> Settings:
    """
    Builds the immutable settings from the given flags and the environment.

    Raises:
        SettingsException: If a required setting is missing or a value is invalid.
    """
    try:
        return Settings(**flags)
    except ValidationError as error:
        raise SettingsException(str(error)) from error


def version_string() -> str:
    return f"{APP_NAME} version {VERSION}, build {BUILD} (Released {RELEASE_DATE})"
