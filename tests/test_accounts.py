"""
Tests for the account service
"""

import uuid
from datetime import timedelta

import pytest

from conftest import FakeNotifier
from visitswap.models import User
from visitswap.services.accounts import AccountService
from visitswap.utils.exceptions import ConflictError, InvalidCredentialError, NotFoundError
from visitswap.utils.hashing import verify_password
from visitswap.utils.timeutils import utc_now
from visitswap.utils.tokens import decode_session_token


def reload_user(store, user_id):
    with store.session() as db:
        return db.get(User, user_id)


async def registered_and_verified(accounts, notifier, email="ana@example.com", password="s3cret-pass"):
    user = await accounts.register("Ana", email, password)
    accounts.verify(notifier.last_token("verification"))
    return user


class TestRegister:

    @pytest.mark.asyncio
    async def test_creates_unverified_account_with_zero_credits(self, store, notifier):
        user = await AccountService(store, notifier).register("Ana", "  Ana@Example.COM ", "s3cret-pass")

        saved = reload_user(store, user.id)
        assert saved.email == "ana@example.com"
        assert saved.verified is False
        assert saved.credits == 0
        assert saved.password_hash != "s3cret-pass"
        assert verify_password("s3cret-pass", saved.password_hash)

    @pytest.mark.asyncio
    async def test_sends_verification_link(self, store, notifier):
        user = await AccountService(store, notifier).register("Ana", "ana@example.com", "s3cret-pass")

        kind, email, token = notifier.sent[0]
        assert (kind, email) == ("verification", "ana@example.com")
        assert token == reload_user(store, user.id).verification_token

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, store, notifier):
        accounts = AccountService(store, notifier)
        await accounts.register("Ana", "ana@example.com", "s3cret-pass")

        with pytest.raises(ConflictError):
            await accounts.register("Other Ana", "ANA@example.com", "another-pass")

    @pytest.mark.asyncio
    async def test_notification_failure_keeps_account(self, store):
        user = await AccountService(store, FakeNotifier(fail=True)).register("Ana", "ana@example.com", "s3cret-pass")

        assert reload_user(store, user.id) is not None


class TestVerify:

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, store, notifier):
        accounts = AccountService(store, notifier)
        user = await accounts.register("Ana", "ana@example.com", "s3cret-pass")
        token = notifier.last_token("verification")

        accounts.verify(token)

        saved = reload_user(store, user.id)
        assert saved.verified is True
        assert saved.verification_token is None
        with pytest.raises(InvalidCredentialError):
            accounts.verify(token)

    def test_unknown_token(self, store, notifier):
        with pytest.raises(InvalidCredentialError):
            AccountService(store, notifier).verify("no-such-token")

    @pytest.mark.asyncio
    async def test_expired_token(self, store, notifier):
        accounts = AccountService(store, notifier)
        user = await accounts.register("Ana", "ana@example.com", "s3cret-pass")
        with store.transaction() as db:
            db.get(User, user.id).verification_token_expires = utc_now() - timedelta(minutes=1)

        with pytest.raises(InvalidCredentialError):
            accounts.verify(notifier.last_token("verification"))


class TestLogin:

    @pytest.mark.asyncio
    async def test_issues_session_token(self, store, notifier):
        accounts = AccountService(store, notifier)
        user = await registered_and_verified(accounts, notifier)

        result = accounts.login("ANA@example.com", "s3cret-pass")

        assert result.user.id == user.id
        assert decode_session_token(result.token) == user.id

    @pytest.mark.asyncio
    async def test_unverified_account_rejected(self, store, notifier):
        accounts = AccountService(store, notifier)
        await accounts.register("Ana", "ana@example.com", "s3cret-pass")

        with pytest.raises(InvalidCredentialError) as exc:
            accounts.login("ana@example.com", "s3cret-pass")
        assert exc.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_same_message_for_wrong_password_and_unknown_email(self, store, notifier):
        accounts = AccountService(store, notifier)
        await registered_and_verified(accounts, notifier)

        with pytest.raises(InvalidCredentialError) as wrong_password:
            accounts.login("ana@example.com", "wrong-pass")
        with pytest.raises(InvalidCredentialError) as unknown_email:
            accounts.login("nobody@example.com", "s3cret-pass")

        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"


class TestPasswordReset:

    @pytest.mark.asyncio
    async def test_forgot_then_reset(self, store, notifier):
        accounts = AccountService(store, notifier)
        user = await registered_and_verified(accounts, notifier)

        await accounts.forgot_password("ana@example.com")
        token = notifier.last_token("reset")
        accounts.reset_password(token, "brand-new-pass")

        saved = reload_user(store, user.id)
        assert saved.reset_password_token is None
        assert saved.reset_password_expires is None
        assert accounts.login("ana@example.com", "brand-new-pass").user.id == user.id
        with pytest.raises(InvalidCredentialError):
            accounts.login("ana@example.com", "s3cret-pass")

    @pytest.mark.asyncio
    async def test_reset_token_is_single_use(self, store, notifier):
        accounts = AccountService(store, notifier)
        await registered_and_verified(accounts, notifier)
        await accounts.forgot_password("ana@example.com")
        token = notifier.last_token("reset")

        accounts.reset_password(token, "brand-new-pass")

        with pytest.raises(InvalidCredentialError):
            accounts.reset_password(token, "yet-another-pass")

    @pytest.mark.asyncio
    async def test_expired_reset_token(self, store, notifier):
        accounts = AccountService(store, notifier)
        user = await registered_and_verified(accounts, notifier)
        await accounts.forgot_password("ana@example.com")
        with store.transaction() as db:
            db.get(User, user.id).reset_password_expires = utc_now() - timedelta(seconds=1)

        with pytest.raises(InvalidCredentialError):
            accounts.reset_password(notifier.last_token("reset"), "brand-new-pass")

    @pytest.mark.asyncio
    async def test_forgot_unknown_email(self, store, notifier):
        with pytest.raises(NotFoundError):
            await AccountService(store, notifier).forgot_password("nobody@example.com")
        assert notifier.sent == []


class TestProfile:

    def test_get_profile(self, store, notifier, visitor):
        assert AccountService(store, notifier).get_profile(visitor.id).email == "visitor@example.com"

    def test_missing_user(self, store, notifier):
        with pytest.raises(NotFoundError):
            AccountService(store, notifier).get_profile(uuid.uuid4())
