from app.utils.caching import filter_headers
from app.utils.logging import PROXY_CHANNELS, get_logger

URL = "https://data.europarl.europa.eu/api/v2/meetings?year=2025&format=application%2Fld%2Bjson"


def test_set_then_get_returns_stored_response(response_cache):
    headers = {
        "Content-Type": "application/ld+json",
        "Content-Length": "123",
        "Transfer-Encoding": "chunked",
        "ETag": '"abc"',
    }
    response_cache.set(URL, '{"total": 42}', 200, headers)

    entry = response_cache.get(URL)
    assert entry is not None
    assert entry.status_code == 200
    assert entry.payload == '{"total": 42}'
    assert entry.headers == {"content-type": "application/ld+json", "etag": '"abc"'}


def test_filter_headers_drops_framing_headers():
    headers = [
        ("content-length", "10"),
        ("TRANSFER-ENCODING", "chunked"),
        ("Content-Encoding", "gzip"),
        ("cache-control", "max-age=60"),
    ]
    assert filter_headers(headers) == {"cache-control": "max-age=60"}


def test_entry_is_served_until_retention_window_ends(response_cache, clock):
    response_cache.set(URL, "{}", 200, {})
    clock.advance(7199)
    assert response_cache.get(URL) is not None


def test_stale_entry_is_evicted_on_read(response_cache, clock):
    response_cache.set(URL, "{}", 200, {})
    clock.advance(7200)

    assert response_cache.get(URL) is None
    assert URL not in response_cache
    assert len(response_cache) == 0


def test_keys_with_different_query_strings_are_distinct(response_cache):
    response_cache.set(URL, '{"a": 1}', 200, {})
    response_cache.set(URL + "&limit=1", '{"b": 2}', 200, {})

    assert len(response_cache) == 2
    assert response_cache.get(URL).payload == '{"a": 1}'


def test_last_write_wins(response_cache):
    response_cache.set(URL, '{"first": true}', 200, {})
    response_cache.set(URL, '{"second": true}', 200, {})

    assert len(response_cache) == 1
    assert response_cache.get(URL).payload == '{"second": true}'


def test_evict_and_clear(response_cache):
    response_cache.set(URL, "{}", 200, {})
    response_cache.set(URL + "&x=1", "{}", 200, {})

    assert response_cache.evict(URL) is True
    assert response_cache.evict(URL) is False
    assert response_cache.clear() == 1
    assert len(response_cache) == 0


def test_stats_report_age_and_remaining_life(response_cache, clock):
    response_cache.set(URL, "{}", 200, {})
    clock.advance(90)

    stats = response_cache.stats().model_dump(by_alias=True)
    assert stats == {
        "cacheSize": 1,
        "cacheDuration": 7200,
        "entries": [{"url": URL, "age": 90, "expires": 7110}],
    }


def test_cache_events_are_logged_on_the_cache_channel(response_cache):
    messages = []
    logger = get_logger()
    sink = logger.add(
        messages.append,
        filter=lambda record: record["extra"].get("channel") in PROXY_CHANNELS,
        format="{extra[channel]} {message}",
    )
    try:
        response_cache.get(URL)
        response_cache.set(URL, "{}", 200, {})
        response_cache.get(URL)
        get_logger().info("unrelated")
    finally:
        logger.remove(sink)

    lines = [str(message).strip() for message in messages]
    assert lines == [
        f"cache Cache MISS for: {URL}",
        f"cache Cache SET for: {URL} (2 chars)",
        f"cache Cache HIT for: {URL}",
    ]
