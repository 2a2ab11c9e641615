import dataclasses

import pytest

from src.college_attendance.college_attendance.core.enums import Role
from src.college_attendance.college_attendance.core.exceptions import AuthenticationError
from src.college_attendance.college_attendance.users.model import User


def test_authenticate_returns_session_user(container):
    s_user = container.auth_service.authenticate("teacher", "teacher123")

    assert s_user.user_id == 100
    assert s_user.role == Role.TEACHER


@pytest.mark.parametrize(
    "username, password",
    [("teacher", "wrong"), ("nobody", "teacher123"), ("", "teacher123"), ("   ", "x")],
)
def test_authenticate_rejects_bad_credentials(container, username, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(username, password)


def test_inactive_and_placeholder_hash_accounts_cannot_log_in(container, users_repo):
    users_repo.users[200] = User(
        user_id=200,
        username="legacy",
        password_hash="CHANGE_ME",
        full_name="Legacy",
        email="legacy@college.test",
        role=Role.ADMIN,
    )
    users_repo.users[100] = dataclasses.replace(users_repo.users[100], is_active=False)

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("legacy", "CHANGE_ME")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("teacher", "teacher123")
