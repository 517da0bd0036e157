"""Integration tests for UserCredentialRepositorySQLAlchemy with SQLite."""

from datetime import timedelta
from uuid import uuid4

from juander.domain.shared.time import utc_now
from juander_auth.persistence.sqlalchemy import UserCredentialRepositorySQLAlchemy


class TestUserCredentialRepositorySQLAlchemy:
    async def test_save_and_find(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session)
        user_id = uuid4()

        await repo.save(user_id, "$argon2id$first")
        credential = await repo.find_by_user_id(user_id)

        assert credential.password_hash == "$argon2id$first"
        assert credential.failed_login_attempts == 0
        assert credential.locked_until is None

    async def test_save_twice_updates_hash(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session)
        user_id = uuid4()

        await repo.save(user_id, "$argon2id$first")
        await repo.save(user_id, "$argon2id$second")

        credential = await repo.find_by_user_id(user_id)
        assert credential.password_hash == "$argon2id$second"

    async def test_lockout_after_max_failures(self, session):
        repo = UserCredentialRepositorySQLAlchemy(
            session,
            max_failed_attempts=5,
            lockout_minutes=15,
        )
        user_id = uuid4()
        await repo.save(user_id, "$argon2id$hash")

        for _ in range(4):
            await repo.increment_failed_attempts(user_id)
        is_locked, _ = await repo.is_account_locked(user_id)
        assert is_locked is False

        attempts = await repo.increment_failed_attempts(user_id)
        is_locked, locked_until = await repo.is_account_locked(user_id)

        assert attempts == 5
        assert is_locked is True
        assert utc_now() + timedelta(minutes=14) < locked_until
        assert locked_until <= utc_now() + timedelta(minutes=15)

    async def test_reset_clears_lock(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session, max_failed_attempts=1)
        user_id = uuid4()
        await repo.save(user_id, "$argon2id$hash")
        await repo.increment_failed_attempts(user_id)

        await repo.reset_failed_attempts(user_id)

        assert await repo.is_account_locked(user_id) == (False, None)
        credential = await repo.find_by_user_id(user_id)
        assert credential.failed_login_attempts == 0

    async def test_expired_lock_is_ignored(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session, lockout_minutes=-1)
        user_id = uuid4()
        await repo.save(user_id, "$argon2id$hash")
        for _ in range(5):
            await repo.increment_failed_attempts(user_id)

        assert await repo.is_account_locked(user_id) == (False, None)

    async def test_update_last_login(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session)
        user_id = uuid4()
        await repo.save(user_id, "$argon2id$hash")

        await repo.update_last_login(user_id)

        credential = await repo.find_by_user_id(user_id)
        assert credential.last_login_at is not None

    async def test_unknown_user(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session)

        assert await repo.find_by_user_id(uuid4()) is None
        assert await repo.increment_failed_attempts(uuid4()) == 0
        assert await repo.delete(uuid4()) is False

    async def test_delete(self, session):
        repo = UserCredentialRepositorySQLAlchemy(session)
        user_id = uuid4()
        await repo.save(user_id, "$argon2id$hash")

        assert await repo.delete(user_id) is True
        assert await repo.find_by_user_id(user_id) is None
