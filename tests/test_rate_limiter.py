from types import SimpleNamespace

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core import deps
from app.core.config import settings
from app.core.exceptions import RateLimitError
from app.utils import rate_limiter

REDIS_URL = "redis://localhost:6379/15"


class _FakePipeline:
    def __init__(self, store):
        self.store = store
        self.ops = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def incr(self, key, amount):
        self.ops.append(("incr", key, amount))

    def expire(self, key, seconds, nx=False):
        self.ops.append(("expire", key, seconds))

    def execute(self):
        results = []
        for op in self.ops:
            if op[0] == "incr":
                self.store[op[1]] = self.store.get(op[1], 0) + op[2]
                results.append(self.store[op[1]])
            else:
                results.append(True)
        return results


class _FakeRedis:
    def __init__(self):
        self.store = {}

    def pipeline(self):
        return _FakePipeline(self.store)


def test_allow_counts_within_window(monkeypatch):
    fake = _FakeRedis()
    monkeypatch.setattr(rate_limiter, "get_client", lambda redis_url: fake)
    results = [rate_limiter.allow_for_client(REDIS_URL, "waitlist", "10.0.0.1", 2) for _ in range(3)]
    assert results == [True, True, False]
    # other clients have their own window
    assert rate_limiter.allow_for_client(REDIS_URL, "waitlist", "10.0.0.2", 2) is True
    assert fake.store["ratelimit:waitlist:10.0.0.1"] == 3


def _request(host="10.0.0.1"):
    app = SimpleNamespace(state=SimpleNamespace(settings=settings))
    return SimpleNamespace(app=app, client=SimpleNamespace(host=host))


def test_dependency_rejects_over_limit(monkeypatch):
    monkeypatch.setattr(settings, "WAITLIST_RATE_LIMIT_PER_MINUTE", 1)
    monkeypatch.setattr(deps, "allow_for_client", lambda *args: False)
    with pytest.raises(RateLimitError):
        deps.waitlist_rate_limit(_request())


def test_dependency_disabled_with_zero_limit(monkeypatch):
    monkeypatch.setattr(settings, "WAITLIST_RATE_LIMIT_PER_MINUTE", 0)

    def fail(*args):
        raise AssertionError("limiter should not be consulted")

    monkeypatch.setattr(deps, "allow_for_client", fail)
    deps.waitlist_rate_limit(_request())


def test_dependency_allows_when_redis_is_down(monkeypatch):
    monkeypatch.setattr(settings, "WAITLIST_RATE_LIMIT_PER_MINUTE", 5)

    def down(*args):
        raise RedisConnectionError("connection refused")

    monkeypatch.setattr(deps, "allow_for_client", down)
    deps.waitlist_rate_limit(_request())


def test_dependency_uses_configured_redis(monkeypatch):
    monkeypatch.setattr(settings, "WAITLIST_RATE_LIMIT_PER_MINUTE", 3)
    monkeypatch.setattr(settings, "REDIS_URL", REDIS_URL)
    calls = []

    def record(*args):
        calls.append(args)
        return True

    monkeypatch.setattr(deps, "allow_for_client", record)
    deps.waitlist_rate_limit(_request("10.9.9.9"))
    assert calls == [(REDIS_URL, "waitlist", "10.9.9.9", 3, 60)]
