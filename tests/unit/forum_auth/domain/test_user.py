"""Unit tests for the User aggregate."""

from datetime import datetime, timezone

import pytest

from forum_auth.domain.user import User, UserRole

HASH = "$2b$04$abcdefghijklmnopqrstuuABCDEFGHIJKLMNOPQRSTUVWXYZ01234"


class TestUserCreate:
    def test_defaults_to_user_role(self):
        user = User.create("alice", HASH)

        assert user.role == UserRole.USER
        assert not user.is_admin
        assert user.id is None
        assert not user.is_persisted

    def test_timestamps_are_timezone_aware(self):
        user = User.create("alice", HASH)

        assert user.created_at.tzinfo is not None
        assert user.updated_at.tzinfo is not None

    def test_role_accepts_plain_string(self):
        user = User("alice", HASH, role="admin")
        assert user.role == UserRole.ADMIN

    def test_unknown_role_string_raises(self):
        with pytest.raises(ValueError):
            User("alice", HASH, role="superuser")


class TestUserIdentity:
    def test_assign_id_once(self):
        user = User.create("alice", HASH)
        user.assign_id(5)

        assert user.id == 5
        assert user.is_persisted

    def test_assign_id_twice_raises(self):
        user = User.create("alice", HASH)
        user.assign_id(5)

        with pytest.raises(ValueError, match="already has id"):
            user.assign_id(6)

    def test_equality_by_id(self):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        a = User.reconstitute(1, "alice", HASH, "user", created, created)
        b = User.reconstitute(1, "alice", "other-hash", "admin", created, created)

        assert a == b
        assert hash(a) == hash(b)

    def test_unpersisted_users_compare_by_identity(self):
        a = User.create("alice", HASH)
        b = User.create("alice", HASH)

        assert a != b
        assert a == a

    def test_repr_hides_password_hash(self):
        user = User.create("alice", HASH)
        assert HASH not in repr(user)
        assert "alice" in repr(user)


class TestUserMutations:
    def test_promote_and_demote(self):
        user = User.create("alice", HASH)
        before = user.updated_at

        user.promote_to_admin()
        assert user.is_admin
        assert user.updated_at >= before

        user.demote_to_user()
        assert user.role == UserRole.USER

    def test_change_password_hash(self):
        user = User.create("alice", HASH)
        user.change_password_hash("new-hash")
        assert user.password_hash == "new-hash"
