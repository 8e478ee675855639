"""
Tests for the in-memory stores and the credential store built on them.
"""

import pytest

from auth.credentials import CredentialStore
from database.stores import InMemoryTaskStore, InMemoryUserStore, TaskNotFound


class TestTaskStore:
    def setup_method(self):
        self.store = InMemoryTaskStore()

    def test_create_assigns_global_sequential_ids(self):
        a = self.store.create(1, "first")
        b = self.store.create(2, "second")
        c = self.store.create(1, "third")
        assert [a.id, b.id, c.id] == [1, 2, 3]
        assert c.owner_id == 1

    def test_list_is_owner_scoped_in_insertion_order(self):
        self.store.create(1, "a")
        self.store.create(2, "b")
        self.store.create(1, "c")
        assert [t.text for t in self.store.list(1)] == ["a", "c"]
        assert [t.text for t in self.store.list(2)] == ["b"]
        assert self.store.list(3) == []

    def test_list_is_a_snapshot(self):
        self.store.create(1, "a")
        snapshot = self.store.list(1)
        self.store.create(1, "b")
        assert len(snapshot) == 1

    def test_delete_own_task(self):
        task = self.store.create(1, "a")
        self.store.delete(1, task.id)
        assert self.store.list(1) == []

    def test_delete_other_owners_task_looks_missing(self):
        task = self.store.create(2, "theirs")
        with pytest.raises(TaskNotFound):
            self.store.delete(1, task.id)
        assert len(self.store.list(2)) == 1

    def test_delete_missing_task(self):
        with pytest.raises(TaskNotFound):
            self.store.delete(1, 99)

    def test_ids_not_reused_after_delete(self):
        self.store.create(1, "a")
        second = self.store.create(1, "b")
        self.store.delete(1, 1)
        third = self.store.create(1, "c")
        assert third.id == 3
        assert third.id != second.id

    def test_serializes_owner_as_camel_case(self):
        task = self.store.create(5, "x")
        assert task.model_dump(by_alias=True) == {"id": 1, "text": "x", "ownerId": 5}


class TestUserStore:
    def test_duplicate_usernames_get_distinct_ids(self):
        store = InMemoryUserStore()
        first = store.add("alice", "h1")
        second = store.add("alice", "h2")
        assert first.id != second.id
        assert len(store) == 2
        assert store.find_by_username("alice") == first

    def test_unknown_username(self):
        assert InMemoryUserStore().find_by_username("nobody") is None


class TestCredentialStore:
    def setup_method(self):
        self.users = InMemoryUserStore()
        self.credentials = CredentialStore(self.users, rounds=4)

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_password(self):
        user = await self.credentials.register("alice", "pw")
        assert user.id == 1
        assert user.password_hash != "pw"
        assert await self.credentials.verify_password("pw", user.password_hash)

    @pytest.mark.asyncio
    async def test_register_twice_succeeds(self):
        first = await self.credentials.register("alice", "pw")
        second = await self.credentials.register("alice", "other")
        assert (first.id, second.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_authenticate(self):
        user = await self.credentials.register("alice", "pw")
        assert await self.credentials.authenticate("alice", "pw") == user
        assert await self.credentials.authenticate("alice", "nope") is None
        assert await self.credentials.authenticate("bob", "pw") is None
