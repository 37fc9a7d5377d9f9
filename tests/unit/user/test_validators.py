"""Tests for account field validators."""

import pytest

from activityrec.core.modules.user.validators import is_email, validate_email, validate_name, validate_password
from activityrec.errors import ValidationError


class TestEmail:
    @pytest.mark.parametrize("email", ["ann@x.com", "Ann.Smith+tag@Example.org", "a@b.co"])
    def test_valid_emails(self, email):
        assert is_email(email)
        validate_email(email)

    @pytest.mark.parametrize("email", ["", "ann", "ann@", "@x.com", "ann@x", "ann @x.com", "ann@@x.com"])
    def test_invalid_emails(self, email):
        assert not is_email(email)
        with pytest.raises(ValidationError, match="Invalid email address"):
            validate_email(email)

    def test_overlong_email_rejected(self):
        assert not is_email("a" * 250 + "@x.com")


class TestName:
    def test_valid_name(self):
        validate_name("Ann")

    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least 2"):
            validate_name("A")

    def test_whitespace_only_counts_as_empty(self):
        with pytest.raises(ValidationError):
            validate_name("    ")

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validate_name("x" * 256)


class TestPassword:
    def test_minimum_length_accepted(self):
        validate_password("12345678")

    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least 8"):
            validate_password("1234567")

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validate_password("x" * 101)
