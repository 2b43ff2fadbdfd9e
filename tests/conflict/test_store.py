import pytest

from driftpatch.conflict.store import InMemoryStore, LocalFileStore, StoredFile, content_token
from driftpatch.errors import PathViolation, StoreNotFoundError, VersionConflictError


def test_content_token_is_git_blob_id():
    assert content_token("") == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
    assert content_token("hello\n") == "ce013625030ba8dba906f756967f9e9ca394464a"


@pytest.mark.asyncio
async def test_in_memory_create_then_update():
    store = InMemoryStore()
    t1 = await store.write("a.txt", "one", None, "main", "create")
    assert await store.get_content("a.txt", "main") == StoredFile("one", t1)
    t2 = await store.write("a.txt", "two", t1, "main", "update")
    assert t2 != t1
    assert [r.message for r in store.history] == ["create", "update"]
    assert store.history[1].base_token == t1


@pytest.mark.asyncio
async def test_in_memory_stale_token_conflicts():
    store = InMemoryStore()
    store.seed("a.txt", "remote", token="v2")
    with pytest.raises(VersionConflictError) as exc:
        await store.write("a.txt", "local", "v1", "main", "msg")
    assert exc.value.version_token == "v1"
    assert exc.value.current_token == "v2"
    assert store.peek("a.txt").content == "remote"


@pytest.mark.asyncio
async def test_in_memory_tokenless_write_to_existing_path_conflicts():
    store = InMemoryStore()
    store.seed("a.txt", "remote")
    with pytest.raises(VersionConflictError):
        await store.write("a.txt", "local", None, "main", "msg")


@pytest.mark.asyncio
async def test_in_memory_missing_path():
    store = InMemoryStore()
    with pytest.raises(StoreNotFoundError):
        await store.get_content("nope.txt", "main")
    with pytest.raises(StoreNotFoundError):
        await store.write("nope.txt", "x", "v1", "main", "msg")


@pytest.mark.asyncio
async def test_in_memory_refs_are_separate():
    store = InMemoryStore()
    store.seed("a.txt", "main text", ref="main")
    store.seed("a.txt", "dev text", ref="dev")
    assert (await store.get_content("a.txt", "dev")).content == "dev text"


@pytest.mark.asyncio
async def test_local_store_round_trip(tmp_path):
    store = LocalFileStore(str(tmp_path))
    token = await store.write("src/app.py", "print(1)\r\n", None, "main", "create")
    assert (tmp_path / "main" / "src" / "app.py").read_bytes() == b"print(1)\r\n"
    stored = await store.get_content("src/app.py", "main")
    assert stored == StoredFile("print(1)\r\n", token)
    assert token == content_token("print(1)\r\n")


@pytest.mark.asyncio
async def test_local_store_compare_and_swap(tmp_path):
    store = LocalFileStore(str(tmp_path))
    t1 = await store.write("a.txt", "one", None, "main", "create")
    t2 = await store.write("a.txt", "two", t1, "main", "update")
    with pytest.raises(VersionConflictError):
        await store.write("a.txt", "three", t1, "main", "stale")
    assert (await store.get_content("a.txt", "main")).version_token == t2
    # No staging files are left behind.
    assert sorted(p.name for p in (tmp_path / "main").iterdir()) == ["a.txt"]


@pytest.mark.asyncio
async def test_local_store_rejects_traversal(tmp_path):
    store = LocalFileStore(str(tmp_path / "root"))
    with pytest.raises(PathViolation):
        await store.write("../../escape.txt", "x", None, "main", "msg")
    with pytest.raises(PathViolation):
        await store.get_content("a.txt", "..")


@pytest.mark.asyncio
async def test_local_store_missing_file(tmp_path):
    store = LocalFileStore(str(tmp_path))
    with pytest.raises(StoreNotFoundError):
        await store.get_content("missing.txt", "main")
