from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import settings
from app.core.exceptions import UnauthenticatedError
from app.core.security import create_access_token, verify_access_token
from app.deps import get_current_user_id


def test_token_round_trip():
    assert verify_access_token(create_access_token("alice")) == "alice"


def test_expired_token():
    token = create_access_token("alice", expires_delta=timedelta(seconds=-30))

    assert verify_access_token(token) is None


def test_token_signed_with_another_key():
    token = jwt.encode({"sub": "alice"}, "some_other_key", algorithm=settings.ALGORITHM)

    assert verify_access_token(token) is None


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_current_user_requires_valid_token(token):
    with pytest.raises(UnauthenticatedError):
        get_current_user_id(token)
