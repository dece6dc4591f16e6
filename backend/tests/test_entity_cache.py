"""天氣實體快取測試"""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from zephyr.cache.entity import CacheEntry, EntityCache, MasterCaches, normalize_key


class FakeClock:
    """可手動推進的時鐘"""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return EntityCache("test", time_func=clock)


class TestNormalizeKey:
    """測試鍵值正規化"""

    def test_case_insensitive(self):
        """測試不分大小寫"""
        assert normalize_key("Rome") == normalize_key("ROME") == normalize_key("rome")

    def test_idempotent(self):
        """測試重複正規化結果不變"""
        key = normalize_key("  New York ")
        assert key == "NEW+YORK"
        assert normalize_key(key) == key


class TestEntityCache:
    """測試單一實體快取"""

    def test_roundtrip(self, cache):
        """測試寫入後立即讀取"""
        cache.put("Rome", "sunny")
        assert cache.get("Rome", 1) == ("sunny", True)

    def test_missing_key(self, cache):
        """測試不存在的鍵值"""
        assert cache.get("Paris", 1) == (None, False)

    def test_case_insensitive_identity(self, cache):
        """測試不同大小寫指向同一項目"""
        cache.put("Rome", "sunny")
        assert cache.get("ROME", 1) == ("sunny", True)
        assert cache.get("rome", 1) == ("sunny", True)

    def test_expiration(self, cache, clock):
        """測試 1 小時 TTL 的過期邊界"""
        cache.put("Rome", "sunny")

        clock.advance(minutes=59)
        assert cache.get("Rome", 1) == ("sunny", True)

        clock.advance(minutes=2)
        assert cache.get("Rome", 1) == (None, False)

    def test_exactly_at_ttl_is_still_valid(self, cache, clock):
        """測試剛好等於 TTL 時仍視為有效（只有超過才過期）"""
        cache.put("Rome", "sunny")
        clock.advance(hours=1)
        assert cache.get("Rome", 1) == ("sunny", True)

    def test_expired_entry_is_not_removed(self, cache, clock):
        """測試讀取過期項目不會刪除它"""
        cache.put("Rome", "sunny")
        clock.advance(hours=2)

        assert cache.get("Rome", 1) == (None, False)
        assert len(cache) == 1
        # 較長的 TTL 仍可讀到同一筆資料
        assert cache.get("Rome", 3) == ("sunny", True)

    def test_put_overwrites_and_refreshes_timestamp(self, cache, clock):
        """測試覆蓋寫入會替換值並更新時間戳記"""
        cache.put("Rome", "sunny")
        clock.advance(hours=2)
        cache.put("ROME", "rainy")

        assert cache.get("Rome", 1) == ("rainy", True)
        assert len(cache) == 1

    def test_entry_is_immutable(self, clock):
        """測試快取項目不可修改"""
        entry = CacheEntry(value="sunny", captured_at=clock())
        with pytest.raises(AttributeError):
            entry.value = "rainy"

    def test_concurrent_access(self, cache):
        """測試多執行緒同時讀寫"""
        errors = []

        def writer(n: int):
            for i in range(200):
                cache.put(f"city-{n}-{i % 10}", i)

        def reader(n: int):
            for i in range(200):
                value, found = cache.get(f"city-{n}-{i % 10}", 1)
                if found and not isinstance(value, int):
                    errors.append(value)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        threads += [threading.Thread(target=reader, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(cache) == 40


class TestMasterCaches:
    """測試快取集合"""

    def test_caches_are_independent(self):
        """測試各實體快取鍵值互不衝突"""
        caches = MasterCaches()
        caches.weather.put("Rome", "weather")
        caches.wind.put("Rome", "wind")

        assert caches.weather.get("Rome", 1) == ("weather", True)
        assert caches.wind.get("Rome", 1) == ("wind", True)
        assert caches.metrics.get("Rome", 1) == (None, False)
        assert caches.moon.get("Rome", 1) == (None, False)
