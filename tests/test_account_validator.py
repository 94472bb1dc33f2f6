"""
Tests for account validation and defaulting.

Run: python -m pytest tests/test_account_validator.py -v
"""

import dataclasses
import logging

import pytest
from pydantic import ValidationError

from models.account_entry import (
    DEFAULT_DESCRIPTION,
    DEFAULT_SESSION_NAME,
    AccountCandidate,
    AccountEntry,
)
from utils.account_validator import validate_account, validate_accounts
from utils.exceptions import AccountValidationException


def _full_candidate(**overrides):
    values = {
        'entry_id': 'entry-1',
        'account_id': '111122223333',
        'allow_ports': [8443],
        'regions': ['eu-west-1', 'us-east-1'],
        'role_name': 'CustomRole',
        'session_name': 'CustomSession',
        'duration_seconds': 900,
        'external_id': 'ext-123',
        'tag_name': 'example.com/state',
        'exclusive_tag_values': ['only-us'],
        'managed_tag_values': ['ours'],
        'description': 'custom description',
    }
    values.update(overrides)
    return AccountCandidate(**values)


class TestDefaulting:
    def test_minimal_entry_gets_defaults(self, logger):
        account = validate_account(AccountCandidate(account_id='123', regions=['us-east-1']), logger)

        assert account.account_id == '123'
        assert account.regions == ('us-east-1',)
        assert account.allow_ports == frozenset({80, 443})
        assert account.role_name == 'STS-UpdateSonarCloudSecurityGroupsRole'
        assert account.session_name == DEFAULT_SESSION_NAME
        assert account.duration_seconds == 1800
        assert account.tag_name == 'fn.imperva.com/UpdateSonarCloudSecurityGroups/state'
        assert account.managed_tag_values == frozenset({'managed'})
        assert account.exclusive_tag_values == frozenset({'exclusive'})
        assert account.description == DEFAULT_DESCRIPTION
        assert account.entry_id is None
        assert account.external_id is None

    def test_supplied_values_are_kept(self, logger):
        account = validate_account(_full_candidate(), logger)

        assert account.entry_id == 'entry-1'
        assert account.allow_ports == frozenset({8443})
        assert account.regions == ('eu-west-1', 'us-east-1')
        assert account.role_name == 'CustomRole'
        assert account.session_name == 'CustomSession'
        assert account.duration_seconds == 900
        assert account.external_id == 'ext-123'
        assert account.tag_name == 'example.com/state'
        assert account.exclusive_tag_values == frozenset({'only-us'})
        assert account.managed_tag_values == frozenset({'ours'})
        assert account.description == 'custom description'

    def test_empty_values_count_as_unset(self, logger):
        candidate = _full_candidate(
            allow_ports=[], role_name='', duration_seconds=0, tag_name='',
            managed_tag_values=[], exclusive_tag_values=[], external_id='', entry_id='',
        )
        account = validate_account(candidate, logger)

        assert account.allow_ports == frozenset({80, 443})
        assert account.role_name == 'STS-UpdateSonarCloudSecurityGroupsRole'
        assert account.duration_seconds == 1800
        assert account.managed_tag_values == frozenset({'managed'})
        assert account.exclusive_tag_values == frozenset({'exclusive'})
        assert account.external_id is None
        assert account.entry_id is None

    def test_region_order_is_preserved(self, logger):
        account = validate_account(
            AccountCandidate(account_id='123', regions=['us-west-2', 'ap-south-1', 'eu-central-1']), logger
        )
        assert account.regions == ('us-west-2', 'ap-south-1', 'eu-central-1')

    def test_validating_twice_is_a_no_op(self, logger):
        once = validate_account(AccountCandidate(account_id='123', regions=['us-east-1']), logger)
        twice = validate_account(once, logger)
        assert twice == once

        full = validate_account(_full_candidate(), logger)
        assert validate_account(full, logger) == full

    def test_entries_are_immutable(self, logger):
        account = validate_account(AccountCandidate(account_id='123', regions=['us-east-1']), logger)
        with pytest.raises(dataclasses.FrozenInstanceError):
            account.account_id = '456'


class TestRequiredFields:
    def test_missing_account_id(self, logger, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(AccountValidationException) as excinfo:
                validate_account(AccountCandidate(entry_id='e-1', regions=['us-east-1']), logger)

        assert excinfo.value.field_name == 'AccountID'
        assert excinfo.value.entry_id == 'e-1'
        assert 'Account ID cannot be empty' in str(excinfo.value)
        record = caplog.records[-1]
        assert record.fields['field'] == 'AccountID'
        assert record.fields['entryID'] == 'e-1'

    def test_account_id_checked_before_regions(self, logger):
        with pytest.raises(AccountValidationException) as excinfo:
            validate_account(AccountCandidate(), logger)
        assert excinfo.value.field_name == 'AccountID'

    def test_missing_regions(self, logger, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(AccountValidationException) as excinfo:
                validate_account(AccountCandidate(account_id='123'), logger)

        assert excinfo.value.field_name == 'Regions'
        assert 'at least 1 region' in str(excinfo.value)
        assert caplog.records[-1].fields['accountID'] == '123'

    def test_empty_regions(self, logger):
        with pytest.raises(AccountValidationException) as excinfo:
            validate_account(AccountCandidate(account_id='123', regions=[]), logger)
        assert excinfo.value.field_name == 'Regions'


class TestBatch:
    def test_one_failure_does_not_block_siblings(self, logger):
        candidates = [
            AccountCandidate(account_id='111', regions=['us-east-1']),
            AccountCandidate(entry_id='broken', regions=['us-east-1']),
            AccountCandidate(account_id='333', regions=['eu-west-1']),
        ]
        report = validate_accounts(candidates, logger)

        assert [account.account_id for account in report.accounts] == ['111', '333']
        assert len(report.failures) == 1
        assert report.failures[0].entry_id == 'broken'
        assert report.failures[0].field_name == 'AccountID'

    def test_empty_batch(self, logger):
        report = validate_accounts([], logger)
        assert report.accounts == []
        assert report.failures == []


def test_entry_constructor_rejects_broken_invariants():
    with pytest.raises(ValidationError):
        AccountEntry(account_id='', regions=('us-east-1',))
    with pytest.raises(ValidationError):
        AccountEntry(account_id='123', regions=())
    with pytest.raises(ValidationError):
        AccountEntry(account_id='123', regions=('us-east-1',), duration_seconds=0)
