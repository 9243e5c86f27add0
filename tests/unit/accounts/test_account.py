"""
Unit tests for the Account domain entity.
"""
import pytest

from accounts.domain.account import Account, Role, validate_password
from core.domain.exceptions import InvalidPasswordError, ValidationError


class TestRole:
    @pytest.mark.parametrize("value", ["ADMIN", "admin", " Admin ", Role.ADMIN])
    def test_admin(self, value):
        assert Role.parse(value) is Role.ADMIN

    @pytest.mark.parametrize("value", ["USER", "", None, "owner"])
    def test_everything_else_is_user(self, value):
        assert Role.parse(value) is Role.USER


class TestAccount:
    def test_create_trims_and_blanks_to_none(self):
        account = Account.create("  jdoe ", name=" ", email="jdoe@example.com", role="admin")

        assert account.username == "jdoe"
        assert account.name is None
        assert account.email == "jdoe@example.com"
        assert account.is_admin
        assert account.id is None

    def test_username_required(self):
        with pytest.raises(ValidationError):
            Account.create("   ")

    def test_with_changes(self):
        account = Account.create("jdoe")
        assert account.with_changes(role=Role.ADMIN).is_admin
        assert not account.is_admin


class TestValidatePassword:
    def test_minimum_length(self):
        assert validate_password("abcd") == "abcd"

    @pytest.mark.parametrize("password", [None, "", "abc"])
    def test_too_short(self, password):
        with pytest.raises(InvalidPasswordError):
            validate_password(password)
