from sfpulse.services.cache import FileCache, MemoryCache


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_memory_cache_expires_entries():
    clock = Clock()
    cache = MemoryCache(default_ttl=60, clock=clock)

    cache.set("#FleetWeek_hype_tweets", [{"id": "1"}])
    assert cache.get("#FleetWeek_hype_tweets") == [{"id": "1"}]

    clock.now += 61
    assert cache.get("#FleetWeek_hype_tweets") is None


def test_file_cache_round_trips_and_sanitizes_keys(tmp_path):
    clock = Clock()
    cache = FileCache(str(tmp_path / "x-api"), default_ttl=60, clock=clock)

    cache.set("#Fleet Week_hype_tweets", {"posts": [1, 2]}, ttl=120)

    assert [p.name for p in (tmp_path / "x-api").iterdir()] == ["_Fleet_Week_hype_tweets.json"]
    clock.now += 100
    assert cache.get("#Fleet Week_hype_tweets") == {"posts": [1, 2]}
    clock.now += 30
    assert cache.get("#Fleet Week_hype_tweets") is None


def test_file_cache_ignores_corrupt_entries_and_clears(tmp_path):
    cache = FileCache(str(tmp_path))
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    cache.set("good", 1)

    assert cache.get("broken") is None

    cache.clear()
    assert list(tmp_path.iterdir()) == []
