from __future__ import annotations

import pytest

from authportal.application.services.password_hashing import WerkzeugPasswordHasher
from authportal.application.services.validation import (
    PASSWORD_LENGTH_MESSAGE,
    USERNAME_LENGTH_MESSAGE,
)
from authportal.application.use_cases.users.login_user import LoginUserUseCase
from authportal.application.use_cases.users.logout_user import LogoutUserUseCase
from authportal.application.use_cases.users.register_user import RegisterUserUseCase
from authportal.domain.users.entities import LoginInput, RegisterInput
from authportal.domain.users.exceptions import (
    EMAIL_TAKEN_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    USERNAME_TAKEN_MESSAGE,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from authportal.infrastructure.sessions import IDENTITY_CLAIM, SessionManager
from authportal.shared.errors.base import HashError, ValidationError


def _register_input(
    username: str = "alice",
    email: str = "a@example.com",
    password: str = "longpass1",
) -> RegisterInput:
    return RegisterInput(username=username, email=email, password=password, password_confirm=password)


def _register(users, hasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=hasher)


def _login(users, hasher) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, password_hasher=hasher, sessions=SessionManager())


def test_register_user_success(users_repo, hasher) -> None:
    user = _register(users_repo, hasher).execute(_register_input())

    assert user.username == "alice"
    assert user.email == "a@example.com"
    assert user.password_hash == "hashed:longpass1"
    assert users_repo.find_by_identifier("alice") == user


@pytest.mark.parametrize(
    ("data", "message"),
    [
        (_register_input(username="ab"), USERNAME_LENGTH_MESSAGE),
        (_register_input(password="short"), PASSWORD_LENGTH_MESSAGE),
    ],
)
def test_register_validation_failure_leaves_store_untouched(
    users_repo,
    hasher,
    data: RegisterInput,
    message: str,
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _register(users_repo, hasher).execute(data)

    assert exc_info.value.message == message
    assert users_repo.inserts == 0
    assert users_repo.users == []


def test_register_duplicate_username(users_repo, hasher) -> None:
    use_case = _register(users_repo, hasher)
    use_case.execute(_register_input())

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        use_case.execute(_register_input(email="other@example.com"))

    assert exc_info.value.message == USERNAME_TAKEN_MESSAGE
    assert exc_info.value.field == "username"
    assert len(users_repo.users) == 1
    assert users_repo.inserts == 1


def test_register_duplicate_email(users_repo, hasher) -> None:
    use_case = _register(users_repo, hasher)
    use_case.execute(_register_input())

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        use_case.execute(_register_input(username="alice2"))

    assert exc_info.value.message == EMAIL_TAKEN_MESSAGE
    assert len(users_repo.users) == 1


def test_register_race_resolved_by_store_constraint(stale_users_repo, hasher) -> None:
    use_case = _register(stale_users_repo, hasher)
    use_case.execute(_register_input())

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        use_case.execute(_register_input())

    assert exc_info.value.field == "username"
    assert stale_users_repo.inserts == 2
    assert len(stale_users_repo.users) == 1


@pytest.mark.parametrize("identifier", ["alice", "a@example.com"])
def test_login_user_success_sets_identity(users_repo, hasher, identifier: str) -> None:
    _register(users_repo, hasher).execute(_register_input())
    session: dict[str, str] = {}

    user = _login(users_repo, hasher).execute(LoginInput(identifier, "longpass1"), session)

    assert user.username == "alice"
    assert session == {IDENTITY_CLAIM: "alice"}


def test_login_failures_are_indistinguishable(users_repo, hasher) -> None:
    _register(users_repo, hasher).execute(_register_input())
    login = _login(users_repo, hasher)
    session: dict[str, str] = {}

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute(LoginInput("alice", "wrong-password"), session)
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute(LoginInput("nobody", "longpass1"), session)

    assert wrong_password.value.message == unknown_user.value.message == INVALID_CREDENTIALS_MESSAGE
    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert session == {}


def test_login_with_corrupt_hash_is_an_internal_error(users_repo) -> None:
    users_repo.insert_user("alice", "a@example.com", "corrupted")
    login = _login(users_repo, WerkzeugPasswordHasher(method="pbkdf2:sha256:1000"))
    session: dict[str, str] = {}

    with pytest.raises(HashError):
        login.execute(LoginInput("alice", "longpass1"), session)

    assert session == {}


def test_logout_clears_identity() -> None:
    session = {IDENTITY_CLAIM: "alice"}

    username = LogoutUserUseCase(sessions=SessionManager()).execute(session)

    assert username == "alice"
    assert session == {}


def test_logout_when_anonymous_is_a_no_op() -> None:
    session: dict[str, str] = {}

    assert LogoutUserUseCase(sessions=SessionManager()).execute(session) is None
    assert session == {}


def test_username_cannot_reuse_another_users_email(users_repo, hasher) -> None:
    use_case = _register(users_repo, hasher)
    use_case.execute(_register_input(username="bob", email="bob@x.io"))

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        use_case.execute(_register_input(username="bob@x.io", email="other@example.com"))

    assert exc_info.value.field == "username"
    assert users_repo.inserts == 1


def test_email_cannot_reuse_another_users_username(users_repo, hasher) -> None:
    use_case = _register(users_repo, hasher)
    use_case.execute(_register_input(username="carol@x.io", email="carol@example.com"))

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        use_case.execute(_register_input(username="carol2", email="carol@x.io"))

    assert exc_info.value.field == "email"
    assert users_repo.inserts == 1


class _CountingHasher:
    def __init__(self, inner) -> None:
        self._inner = inner
        self.hash_calls = 0
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        self.hash_calls += 1
        return self._inner.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return self._inner.verify(password, hashed)


def test_unknown_identifier_still_runs_a_verify(users_repo, hasher) -> None:
    _register(users_repo, hasher).execute(_register_input())
    counting = _CountingHasher(hasher)
    login = _login(users_repo, counting)

    for identifier in ("nobody", "ghost"):
        with pytest.raises(InvalidCredentialsError):
            login.execute(LoginInput(identifier, "longpass1"), {})

    assert counting.verify_calls == 2
    assert counting.hash_calls == 1


def test_wrong_password_and_unknown_user_cost_one_verify_each(users_repo, hasher) -> None:
    _register(users_repo, hasher).execute(_register_input())
    counting = _CountingHasher(hasher)
    login = _login(users_repo, counting)

    with pytest.raises(InvalidCredentialsError):
        login.execute(LoginInput("alice", "wrong-password"), {})
    after_wrong_password = counting.verify_calls
    with pytest.raises(InvalidCredentialsError):
        login.execute(LoginInput("nobody", "wrong-password"), {})

    assert after_wrong_password == 1
    assert counting.verify_calls == 2
