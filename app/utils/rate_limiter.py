from typing import Dict
from redis import Redis

# One client per Redis URL, created on first use
_clients: Dict[str, Redis] = {}


def get_client(redis_url: str) -> Redis:
    client = _clients.get(redis_url)
    if client is None:
        client = Redis.from_url(redis_url, decode_responses=True, socket_timeout=1, socket_connect_timeout=1)
        _clients[redis_url] = client
    return client


def close_clients() -> None:
    while _clients:
        _, client = _clients.popitem()
        client.close()


def hit(redis_url: str, key: str, window_seconds: int) -> int:
    """Count one request against key; the counter expires window_seconds after its first hit."""
    with get_client(redis_url).pipeline() as pipe:
        pipe.incr(key, 1)
        pipe.expire(key, window_seconds, nx=True)
        count, _ = pipe.execute()
    return int(count)


def allow_for_client(redis_url: str, action: str, client_id: str, limit: int, window_seconds: int = 60) -> bool:
    """True while client_id has made at most limit requests for action in the current window."""
    key = f"ratelimit:{action}:{client_id or 'unknown'}"
    return hit(redis_url, key, window_seconds) <= limit
