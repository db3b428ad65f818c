"""Tests para la reconciliación de favoritos."""

import pytest

from progress_sync.core import DEFAULT_FOLDER, CredentialState, StarRecord


class TestStars:
    """Favoritos con y sin sesión."""

    @pytest.mark.asyncio
    async def test_add_star_offline(self, offline, store, server) -> None:
        assert await offline.add_star("p1", 1, 2, 3)
        assert await offline.add_star("p1", 1, 2, 3)

        folder = await store.get_folder(DEFAULT_FOLDER)
        assert [r.pid for r in folder] == ["p1"]
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_folder_isolation(self, offline) -> None:
        await offline.add_star("p1", 1, 2, 3)

        assert await offline.is_starred("p1")
        assert await offline.is_starred("p1", DEFAULT_FOLDER)
        assert not await offline.is_starred("p1", "review")
        assert await offline.get_folder("review") == []

    @pytest.mark.asyncio
    async def test_same_pid_in_two_folders(self, offline) -> None:
        await offline.add_star("p1", 1, 2, 3)
        await offline.add_star("p1", 1, 2, 3, folder="review")
        await offline.remove_star("p1")

        assert not await offline.is_starred("p1", DEFAULT_FOLDER)
        assert await offline.is_starred("p1", "review")
        assert await offline.is_starred("p1")

    @pytest.mark.asyncio
    async def test_add_and_remove_online(self, online, server) -> None:
        assert await online.add_star("p1", 1, 2, 3)
        assert [s["pid"] for s in server.stars] == ["p1"]
        assert await online.is_starred("p1")

        assert await online.remove_star("p1")
        assert server.stars == []
        assert not await online.is_starred("p1")
        assert server.call_names() == ["add_stars", "delete_stars"]

    @pytest.mark.asyncio
    async def test_add_star_retried_after_expiry(self, online, server, auth) -> None:
        server.fail("expiry_token")

        assert await online.add_star("p1", 1, 2, 3)

        assert auth.renewals == 1
        assert [r.pid for r in await online.get_folder()] == ["p1"]

    @pytest.mark.asyncio
    async def test_add_star_already_inserted(self, online, store) -> None:
        await store.add_to_folder(StarRecord(pid="p1", course=1, subject=2, type=3))

        assert await online.add_star("p1", 9, 9, 9)

        folder = await online.get_folder()
        assert len(folder) == 1
        assert folder[0].course == 1

    @pytest.mark.asyncio
    async def test_remove_failure_keeps_star(self, online, store, server, notifier) -> None:
        await online.add_star("p1", 1, 2, 3)
        server.fail("server_error", code=500)

        assert not await online.remove_star("p1")

        assert await store.exists_in_folder("p1", DEFAULT_FOLDER)
        assert notifier.latest().message.startswith("Error al eliminar favorito")

    @pytest.mark.asyncio
    async def test_fetch_replaces_default_folder(self, online, store, server) -> None:
        await store.add_to_folder(StarRecord(pid="old"))
        await store.add_to_folder(StarRecord(pid="kept"), "review")
        server.stars = [{"pid": "a", "course": 1, "subject": 1, "type": 2}, {"pid": "b"}]

        assert await online.fetch_stars()

        assert [r.pid for r in await store.get_folder()] == ["a", "b"]
        assert [r.pid for r in await store.get_folder("review")] == ["kept"]

    @pytest.mark.asyncio
    async def test_fetch_offline_does_nothing(self, offline, server) -> None:
        assert not await offline.fetch_stars()
        assert server.calls == []

    @pytest.mark.asyncio
    async def test_fetch_missing_token_logs_out(self, online, server) -> None:
        server.fail("token_not_exist")

        assert not await online.fetch_stars()

        assert online.login_state.state is CredentialState.LOGGED_OUT

    @pytest.mark.asyncio
    async def test_folder_by_subject(self, offline) -> None:
        await offline.add_star("a", 1, 1, 1)
        await offline.add_star("b", 1, 2, 1)
        await offline.add_star("c", 2, 1, 1)
        await offline.add_star("d", 1, 1, 1, folder="review")

        assert {r.pid for r in await offline.get_folder_by_subject(1)} == {"a", "b"}
        assert {r.pid for r in await offline.get_folder_by_subject(1, 2, -1)} == {"b"}
        assert {r.pid for r in await offline.get_folder_by_subject(1, folder="review")} == {"d"}
