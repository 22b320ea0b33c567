"""
Boutique Backend — Auth Service Tests
======================================

What:  Tests for AuthService.register() and AuthService.login().
How:   Runs against the per-test SQLite database from conftest.py.

What we test:
    ✅ Registration stores a hash, never the plaintext password
    ✅ Role defaults to client; admin may be requested; unknown roles rejected
    ✅ Duplicate email is a StoreError
    ✅ Login issues a token carrying the stored identity
    ✅ Unknown email and wrong password fail identically
"""

import pytest
from sqlalchemy import select, text

from boutique.exceptions import InvalidCredentialsError, StoreError, ValidationError
from boutique.models.user import Role, User
from boutique.schemas.auth import LoginRequest, RegisterRequest


class TestRegister:
    """Tests for account creation."""

    @pytest.mark.asyncio
    async def test_register_success(self, db_session, auth_service):
        result = await auth_service.register(
            db_session, RegisterRequest(email="ana@boutique.test", password="pw-123456")
        )
        assert result.message == "User created successfully."

        user = (await db_session.execute(select(User))).scalar_one()
        assert user.email == "ana@boutique.test"
        assert user.role is Role.CLIENT
        assert user.password != "pw-123456"
        assert auth_service.hasher.verify("pw-123456", user.password)

    @pytest.mark.asyncio
    async def test_register_admin_role(self, db_session, auth_service):
        await auth_service.register(
            db_session,
            RegisterRequest(email="boss@boutique.test", password="pw-123456", role="admin"),
        )
        user = (await db_session.execute(select(User))).scalar_one()
        assert user.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_register_unknown_role(self, db_session, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.register(
                db_session,
                RegisterRequest(email="x@boutique.test", password="pw-123456", role="owner"),
            )
        assert exc_info.value.field == "role"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload,missing",
        [
            ({"password": "pw-123456"}, ["email"]),
            ({"email": "ana@boutique.test"}, ["password"]),
            ({"email": "   ", "password": ""}, ["email", "password"]),
        ],
    )
    async def test_register_missing_fields(self, db_session, auth_service, payload, missing):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.register(db_session, RegisterRequest(**payload))
        assert exc_info.value.context["missing"] == missing

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, db_session, auth_service):
        payload = RegisterRequest(email="ana@boutique.test", password="pw-123456")
        await auth_service.register(db_session, payload)

        with pytest.raises(StoreError) as exc_info:
            await auth_service.register(db_session, payload)
        assert exc_info.value.message == "Error while registering the user."
        assert exc_info.value.context["reason"] == "duplicate_email"


class TestLogin:
    """Tests for credential verification and token issue."""

    @pytest.mark.asyncio
    async def test_login_success(self, db_session, auth_service, token_issuer):
        await auth_service.register(
            db_session,
            RegisterRequest(email="boss@boutique.test", password="pw-123456", role="admin"),
        )
        result = await auth_service.login(
            db_session, LoginRequest(email="boss@boutique.test", password="pw-123456")
        )

        identity = token_issuer.decode(result.token)
        assert identity.email == "boss@boutique.test"
        assert identity.role is Role.ADMIN
        assert identity.id > 0

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(self, db_session, auth_service):
        await auth_service.register(
            db_session, RegisterRequest(email="ana@boutique.test", password="pw-123456")
        )

        with pytest.raises(InvalidCredentialsError) as unknown:
            await auth_service.login(
                db_session, LoginRequest(email="nobody@boutique.test", password="pw-123456")
            )
        with pytest.raises(InvalidCredentialsError) as wrong:
            await auth_service.login(
                db_session, LoginRequest(email="ana@boutique.test", password="wrong")
            )

        assert unknown.value.message == wrong.value.message == "Incorrect email or password."

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, db_session, auth_service):
        with pytest.raises(ValidationError):
            await auth_service.login(db_session, LoginRequest(email="ana@boutique.test"))


class TestUserTable:

    @pytest.mark.asyncio
    async def test_role_defaults_to_client_in_the_database(self, db_session):
        """Rows inserted without a role (e.g. by hand in psql) are clients."""
        await db_session.execute(
            text("INSERT INTO users (email, password) VALUES ('raw@boutique.test', 'x')")
        )
        user = (await db_session.execute(select(User))).scalar_one()
        assert user.role is Role.CLIENT
