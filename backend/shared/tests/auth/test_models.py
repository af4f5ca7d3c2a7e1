"""Tests for staff account validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from shared.auth.models import StaffAccount, StaffRole


class TestStaffAccount:
    def test_empty_password_hash_rejected(self):
        with pytest.raises(ValidationError, match="password hash"):
            StaffAccount(user_id="u1", email="a@x.com", password_hash="")

    def test_email_is_normalized(self):
        account = StaffAccount(user_id="u1", email=" A@X.Com ", password_hash="simple$abc")
        assert account.email == "a@x.com"

    def test_role_defaults_to_staff(self):
        account = StaffAccount(user_id="u1", email="a@x.com", password_hash="simple$abc")
        assert account.role == StaffRole.STAFF
        assert not account.is_super_admin

    def test_json_roundtrip_keeps_role(self):
        account = StaffAccount(
            user_id="u1",
            email="boss@x.com",
            password_hash="simple$abc",
            role=StaffRole.SUPER_ADMIN,
        )
        restored = StaffAccount.model_validate_json(account.model_dump_json())
        assert restored == account
        assert restored.is_super_admin
