"""
Unit tests for request schemas.
"""

import pytest
from pydantic import ValidationError

from admin_auth.schemas import LoginLogQueryRequest, LoginRequest, UpdateAdminRequest


def test_changed_fields_only_includes_sent_fields():
    request = UpdateAdminRequest.model_validate({"realName": "Alice"})
    assert request.changed_fields() == {"real_name": "Alice"}


def test_explicit_null_clears_field():
    request = UpdateAdminRequest.model_validate({"avatar": None, "phone": "555-0100"})
    assert request.changed_fields() == {"avatar": None, "phone": "555-0100"}


def test_login_username_is_stripped():
    assert LoginRequest(username="  admin ", password="x").username == "admin"

    with pytest.raises(ValidationError):
        LoginRequest(username="   ", password="x")


def test_login_log_query_bounds():
    query = LoginLogQueryRequest(page_num=2, page_size=50, status=0, username=" ali ").to_query()
    assert query.offset == 50
    assert query.username == "ali"

    with pytest.raises(ValidationError):
        LoginLogQueryRequest(page_size=101)
    with pytest.raises(ValidationError):
        LoginLogQueryRequest(status=2)
