"""URL normalization and the anonymous-to-account favorites merge."""

import pytest

from pastebox.db.repositories.user_repository import UserRepository
from pastebox.domains.favorites.entities import DEFAULT_TITLE, LocalFavorite, SubmittedFavorites, normalize_url
from pastebox.domains.favorites.services import FavoritesService
from pastebox.domains.identity.entities import User


@pytest.mark.parametrize("raw, expected", [
    ("http://x/a", "http://x/a"),
    ("http://x/a/", "http://x/a"),
    ("HTTP://X.Example/a", "http://x.example/a"),
    ("http://x", "http://x/"),
    ("http://x/", "http://x/"),
    ("  http://x/a/  ", "http://x/a"),
    ("http://x/a/?q=1", "http://x/a/?q=1"),
    ("http://x/Path/", "http://x/Path"),
    ("/d/abc", "/d/abc"),
    ("/d/abc/", "/d/abc"),
    ("/", "/"),
    ("", ""),
    (None, ""),
])
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_relative_url_resolves_against_base():
    assert normalize_url("/d/abc12345/", "https://paste.example") == "https://paste.example/d/abc12345"


class FailingFavoritesService(FavoritesService):
    def __init__(self, *args, fail_on: int, **kwargs):
        super().__init__(*args, **kwargs)
        real_create = self.favorite_repository.create
        calls = {"count": 0}

        async def create(*create_args, **create_kwargs):
            calls["count"] += 1
            if calls["count"] == fail_on:
                raise RuntimeError("connection lost")
            return await real_create(*create_args, **create_kwargs)

        self.favorite_repository.create = create


@pytest.fixture
async def user(test_db):
    return await UserRepository(test_db).create(User.create_user("merge@example.com", "hash"))


async def test_duplicates_after_normalization_merge_into_one(test_db, user):
    service = FavoritesService(test_db)
    store = SubmittedFavorites([LocalFavorite(url="http://x/a"), LocalFavorite(url="http://x/a/")])

    result = await service.merge_local_favorites(user.id, store)

    favorites = await service.list_favorites(user.id)
    assert [f.url for f in favorites] == ["http://x/a"]
    assert len(result.created) == 1
    assert result.skipped == 1
    assert result.cleared
    assert store.cleared
    assert store.load() == []


async def test_relative_duplicates_merge_into_one(test_db, user):
    service = FavoritesService(test_db)
    store = SubmittedFavorites([LocalFavorite(url="/d/abc"), LocalFavorite(url="/d/abc/")])

    result = await service.merge_local_favorites(user.id, store)

    assert [f.url for f in await service.list_favorites(user.id)] == ["/d/abc"]
    assert result.skipped == 1
    assert store.cleared


async def test_existing_server_favorites_are_skipped(test_db, user):
    service = FavoritesService(test_db)
    await service.add_favorite(user.id, "http://x/a/", "Saved")

    result = await service.merge_local_favorites(
        user.id, SubmittedFavorites([LocalFavorite(url="HTTP://X/a"), LocalFavorite(url="http://x/b", title="B")])
    )

    assert [f.url for f in result.created] == ["http://x/b"]
    assert result.skipped == 1
    assert len(await service.list_favorites(user.id)) == 2


async def test_blank_title_becomes_default(test_db, user):
    service = FavoritesService(test_db)
    result = await service.merge_local_favorites(
        user.id, SubmittedFavorites([LocalFavorite(url="http://x/c", title="  ")])
    )
    assert result.created[0].title == DEFAULT_TITLE


async def test_blank_url_is_skipped(test_db, user):
    service = FavoritesService(test_db)
    result = await service.merge_local_favorites(user.id, SubmittedFavorites([LocalFavorite(url="   ")]))
    assert result.created == []
    assert result.skipped == 1


async def test_partial_failure_keeps_local_store_and_retry_is_safe(test_db, user):
    store = SubmittedFavorites([
        LocalFavorite(url="http://x/1"),
        LocalFavorite(url="http://x/2"),
        LocalFavorite(url="http://x/3"),
    ])

    failing = FailingFavoritesService(test_db, fail_on=2)
    with pytest.raises(RuntimeError):
        await failing.merge_local_favorites(user.id, store)

    assert not store.cleared
    assert len(store.load()) == 3
    assert [f.url for f in await failing.list_favorites(user.id)] == ["http://x/1"]

    result = await FavoritesService(test_db).merge_local_favorites(user.id, store)
    assert len(result.created) == 2
    assert result.skipped == 1
    assert store.cleared
    urls = sorted(f.url for f in await FavoritesService(test_db).list_favorites(user.id))
    assert urls == ["http://x/1", "http://x/2", "http://x/3"]
