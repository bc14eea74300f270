"""Tests for marginalia.store.firestore with a mocked AsyncClient."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core.exceptions import FailedPrecondition, PermissionDenied

from marginalia.core.config import Config
from marginalia.core.exceptions import ConfigurationError, MissingIndexError
from marginalia.store import (
    EntryQuery,
    FirestoreDocumentStore,
    MemoryDocumentStore,
    StoredDocument,
    create_store,
    is_missing_index_error,
)


def _snap(doc_id: str, data: dict | None, exists: bool = True):
    snap = MagicMock()
    snap.id = doc_id
    snap.exists = exists
    snap.to_dict.return_value = data
    return snap


def _client_with_query(result=None, error=None):
    client = MagicMock()
    query = MagicMock()
    query.where.return_value = query
    query.order_by.return_value = query
    query.limit.return_value = query
    query.start_after.return_value = query
    query.get = AsyncMock(side_effect=error, return_value=result or [])
    client.collection.return_value = query
    return client, query


class TestMissingIndexClassification:
    def test_failed_precondition_with_index(self):
        err = FailedPrecondition("The query requires an index. You can create it here: https://...")
        assert is_missing_index_error(err)

    def test_other_failed_precondition(self):
        assert not is_missing_index_error(FailedPrecondition("transaction aborted"))

    def test_other_errors(self):
        assert not is_missing_index_error(PermissionDenied("index"))
        assert not is_missing_index_error(ValueError("index"))


class TestFirestoreDocumentStore:
    @pytest.mark.asyncio
    async def test_get_existing(self):
        client = MagicMock()
        client.collection.return_value.document.return_value.get = AsyncMock(return_value=_snap("a", {"x": 1}))
        store = FirestoreDocumentStore(collection="journalEntries", client=client)

        doc = await store.get("a")

        assert doc == StoredDocument("a", {"x": 1})
        client.collection.assert_called_with("journalEntries")
        client.collection.return_value.document.assert_called_with("a")

    @pytest.mark.asyncio
    async def test_get_missing(self):
        client = MagicMock()
        client.collection.return_value.document.return_value.get = AsyncMock(return_value=_snap("a", None, False))
        store = FirestoreDocumentStore(client=client)
        assert await store.get("a") is None

    @pytest.mark.asyncio
    async def test_ordered_query_shape(self):
        cursor_snap = _snap("c", {})
        client, query = _client_with_query([_snap("a", {"t": 1}), _snap("b", {"t": 2})])
        store = FirestoreDocumentStore(client=client)

        docs = await store.query(
            EntryQuery(
                "ownerId", "u1", order_by="createdAt", limit=5, start_after=StoredDocument("c", handle=cursor_snap)
            )
        )

        assert [d.id for d in docs] == ["a", "b"]
        assert docs[0].handle is not None
        field_filter = query.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "ownerId"
        assert field_filter.value == "u1"
        assert query.order_by.call_args.args[0] == "createdAt"
        query.limit.assert_called_with(5)
        query.start_after.assert_called_with(cursor_snap)

    @pytest.mark.asyncio
    async def test_unordered_query_skips_order_by(self):
        client, query = _client_with_query([])
        store = FirestoreDocumentStore(client=client)
        await store.query(EntryQuery("isPublished", True, limit=5))
        query.order_by.assert_not_called()
        query.start_after.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_index_translated(self):
        client, _ = _client_with_query(error=FailedPrecondition("The query requires an index."))
        store = FirestoreDocumentStore(client=client)
        with pytest.raises(MissingIndexError):
            await store.query(EntryQuery("isPublished", True, order_by="createdAt"))

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        client, _ = _client_with_query(error=PermissionDenied("Missing or insufficient permissions."))
        store = FirestoreDocumentStore(client=client)
        with pytest.raises(PermissionDenied):
            await store.query(EntryQuery("isPublished", True, order_by="createdAt"))


class TestCreateStore:
    def test_memory_default(self):
        assert isinstance(create_store(Config(env_prefix="")), MemoryDocumentStore)

    def test_firestore(self):
        config = Config(env_prefix="", defaults={"store": {"backend": "firestore", "project_id": "p"}})
        store = create_store(config)
        assert isinstance(store, FirestoreDocumentStore)
        assert store.project_id == "p"
        assert store.collection == "journalEntries"

    def test_unknown_backend(self):
        config = Config(env_prefix="", defaults={"store": {"backend": "mongo"}})
        with pytest.raises(ConfigurationError, match="mongo"):
            create_store(config)

    def test_firestore_with_credentials(self, tmp_dir):
        from marginalia.core.auth import ServiceAccountAuth

        config = Config(
            env_prefix="",
            defaults={"store": {"backend": "firestore", "credentials_path": f"{tmp_dir}/key.json"}},
        )
        store = create_store(config)
        assert isinstance(store.auth, ServiceAccountAuth)
        assert str(store.auth.key_path).endswith("key.json")

    def test_memory_seed_file(self, tmp_dir):
        seed = f"{tmp_dir}/seed.json"
        with open(seed, "w") as f:
            f.write('{"a": {"ownerId": "u1"}, "b": {"ownerId": "u2"}}')
        config = Config(env_prefix="", defaults={"store": {"seed_file": seed}})
        store = create_store(config)
        assert isinstance(store, MemoryDocumentStore)
        assert len(store) == 2


class TestLazyClient:
    def test_client_uses_auth_project(self, monkeypatch):
        from google.cloud import firestore

        built = {}
        monkeypatch.setattr(firestore, "AsyncClient", lambda **kwargs: built.setdefault("kwargs", kwargs))
        auth = MagicMock()
        auth.credentials = "creds"
        auth.project_id = "from-key"

        store = FirestoreDocumentStore(auth=auth)
        assert store.client is built["kwargs"]
        assert built["kwargs"] == {"credentials": "creds", "project": "from-key"}

    def test_explicit_project_wins(self, monkeypatch):
        from google.cloud import firestore

        monkeypatch.setattr(firestore, "AsyncClient", lambda **kwargs: kwargs)
        auth = MagicMock()
        auth.credentials = "creds"
        auth.project_id = "from-key"

        store = FirestoreDocumentStore(project_id="explicit", auth=auth)
        assert store.client["project"] == "explicit"
