from __future__ import annotations

from dishout.storage.local import LocalStore
from dishout.trending.config import DEFAULT_IMAGE, DEFAULT_SEEDS, KEYWORD_IMAGES, TrendingConfig
from dishout.trending.store import TrendingStore


def _popularity(store: TrendingStore, name: str) -> int:
    return next(e.popularity for e in store.entries() if e.display_name.lower() == name.lower())


def test_first_load_seeds_defaults(trending_store):
    names = {e.display_name for e in trending_store.entries()}
    assert names == {s["display_name"] for s in DEFAULT_SEEDS}


def test_list_is_sorted_and_capped(trending_store):
    listed = trending_store.list()
    assert len(listed) == 6
    scores = [e.popularity for e in listed]
    assert scores == sorted(scores, reverse=True)


def test_list_is_idempotent(trending_store):
    assert trending_store.list() == trending_store.list()


def test_list_ties_keep_insertion_order(local_store):
    config = TrendingConfig(seeds=[
        {"id": "a", "display_name": "Alpha", "query_text": "q", "image_url": "i", "popularity": 10},
        {"id": "b", "display_name": "Beta", "query_text": "q", "image_url": "i", "popularity": 10},
    ])
    store = TrendingStore(local_store, config)
    assert [e.id for e in store.list()] == ["a", "b"]
    assert [e.id for e in store.list()] == ["a", "b"]


def test_record_existing_is_case_insensitive_and_no_duplicate(trending_store):
    before = _popularity(trending_store, "Shawarma")
    count = len(trending_store.entries())

    entry = trending_store.record("  sHaWaRmA ")

    assert entry.display_name == "Shawarma"
    assert _popularity(trending_store, "Shawarma") == before + 5
    assert len(trending_store.entries()) == count


def test_record_new_term_without_keyword(trending_store):
    entry = trending_store.record("mystery stew")
    assert entry.display_name == "Mystery Stew"
    assert entry.image_url == DEFAULT_IMAGE
    assert entry.popularity == 50
    assert entry.query_text == "Find the best mystery stew near me"


def test_record_new_term_uses_first_keyword_match(trending_store):
    entry = trending_store.record("Lamb Shawarma Pizza")
    # shawarma precedes pizza in the lookup table
    assert entry.image_url == KEYWORD_IMAGES["shawarma"]


def test_record_short_term_is_ignored(trending_store):
    count = len(trending_store.entries())
    assert trending_store.record(" ab ") is None
    assert trending_store.record("") is None
    assert len(trending_store.entries()) == count


def test_mutations_persist(local_store, trending_store):
    trending_store.record("Mystery Stew")
    trending_store.record("Kunafa")

    reloaded = TrendingStore(local_store)
    assert _popularity(reloaded, "Mystery Stew") == 50
    assert _popularity(reloaded, "Kunafa") == _popularity(trending_store, "Kunafa")


def test_missing_defaults_are_merged_back(local_store):
    local_store.put("dishout_trending", [
        {"id": "user-1", "display_name": "Mystery Stew", "query_text": "q",
         "image_url": DEFAULT_IMAGE, "popularity": 500},
    ])
    store = TrendingStore(local_store)
    names = [e.display_name for e in store.entries()]
    assert names[0] == "Mystery Stew"
    assert set(names[1:]) == {s["display_name"] for s in DEFAULT_SEEDS}
    assert store.list()[0].display_name == "Mystery Stew"


def test_default_already_stored_is_not_duplicated(local_store):
    local_store.put("dishout_trending", [
        {"id": "seed-shawarma", "display_name": "SHAWARMA", "query_text": "q",
         "image_url": DEFAULT_IMAGE, "popularity": 1},
    ])
    store = TrendingStore(local_store)
    matches = [e for e in store.entries() if e.display_name.lower() == "shawarma"]
    assert len(matches) == 1


def test_malformed_entries_are_skipped(local_store):
    local_store.put("dishout_trending", [{"display_name": ""}, "nonsense"])
    store = TrendingStore(local_store)
    assert len(store.entries()) == len(DEFAULT_SEEDS)


def test_popularity_never_decreases(trending_store):
    seen = _popularity(trending_store, "Kunafa")
    for _ in range(3):
        trending_store.record("kunafa")
        now = _popularity(trending_store, "Kunafa")
        assert now > seen
        seen = now


def test_get_by_id(trending_store):
    assert trending_store.get("seed-sushi").display_name == "Salmon Sushi"
    assert trending_store.get("missing") is None


def test_store_survives_corrupt_document(tmp_path):
    root = tmp_path / "data"
    root.mkdir()
    (root / "dishout_trending.json").write_text("{not json", encoding="utf-8")
    store = TrendingStore(LocalStore(root))
    assert len(store.entries()) == len(DEFAULT_SEEDS)
