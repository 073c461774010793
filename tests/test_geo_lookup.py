"""
Tests for GeoResolver, with HTTP mocked by httpx.MockTransport
"""

import asyncio
import json
import time

import httpx
import pytest

from tracevis.config import Settings
from tracevis.enrichment import GeoResolver
from tracevis.models import GeoLookupError


PAYLOAD = {
    "ip": "93.184.216.34",
    "latitude": 37.0,
    "longitude": -122.0,
    "org": "Example",
    "city": None,
    "country": "United States",
}


def make_resolver(handler, **settings):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeoResolver(Settings(**settings), client=client)


def resolve(resolver, ip):
    async def go():
        async with resolver:
            return await resolver.resolve(ip)
    return asyncio.run(go())


def test_successful_lookup_builds_record():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=PAYLOAD)

    record = resolve(make_resolver(handler), "93.184.216.34")

    assert record.address == "93.184.216.34"
    assert (record.latitude, record.longitude) == (37.0, -122.0)
    assert record.city is None
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == "https://www.iplocate.io/api/lookup/93.184.216.34"


def test_custom_endpoint_is_used():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json=PAYLOAD)

    resolve(make_resolver(handler, endpoint="http://geo.test/lookup/"), "93.184.216.34")
    assert seen == ["http://geo.test/lookup/93.184.216.34"]


@pytest.mark.parametrize("ip", ["10.0.0.99", "192.168.1.1", "", "garbage"])
def test_local_addresses_skip_the_network(ip):
    def handler(request):
        raise AssertionError("no request expected")

    assert resolve(make_resolver(handler), ip) is None


@pytest.mark.parametrize("response", [
    httpx.Response(404, json={"error": "not found"}),
    httpx.Response(500, text="boom"),
    httpx.Response(200, text="<html>not json</html>"),
    httpx.Response(200, json={"ip": "93.184.216.34"}),
    httpx.Response(200, json=[PAYLOAD]),
])
def test_bad_responses_raise_lookup_error(response):
    with pytest.raises(GeoLookupError) as excinfo:
        resolve(make_resolver(lambda request: response), "93.184.216.34")
    assert excinfo.value.address == "93.184.216.34"


def test_network_errors_raise_lookup_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(GeoLookupError):
        resolve(make_resolver(handler), "8.8.8.8")


def test_timeouts_raise_lookup_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(GeoLookupError):
        resolve(make_resolver(handler), "8.8.8.8")


def test_client_is_shared_between_concurrent_lookups():
    def handler(request):
        ip = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200, content=json.dumps(dict(PAYLOAD, ip=ip)))

    resolver = make_resolver(handler)

    async def go():
        async with resolver:
            first = resolver._get_client()
            records = await asyncio.gather(
                resolver.resolve("8.8.8.8"), resolver.resolve("1.1.1.1"))
            assert resolver._get_client() is first
            return records

    records = asyncio.run(go())
    assert [r.address for r in records] == ["8.8.8.8", "1.1.1.1"]


def test_owned_client_is_closed():
    resolver = GeoResolver(Settings())

    async def go():
        async with resolver:
            client = resolver._get_client()
        return client

    client = asyncio.run(go())
    assert client.is_closed
    assert resolver._client is None


class SlowBody(httpx.AsyncByteStream):
    """Response body that trickles out one byte at a time"""

    def __init__(self, body: bytes, delay: float):
        self.body = body
        self.delay = delay

    async def __aiter__(self):
        for i in range(len(self.body)):
            await asyncio.sleep(self.delay)
            yield self.body[i:i + 1]


def test_slow_body_is_cut_off_by_lookup_timeout():
    body = json.dumps(dict(PAYLOAD, ip="8.8.8.8")).encode()

    def handler(request):
        return httpx.Response(200, stream=SlowBody(body, delay=0.1))

    resolver = make_resolver(handler, timeout=0.3)
    start = time.monotonic()
    with pytest.raises(GeoLookupError) as excinfo:
        resolve(resolver, "8.8.8.8")
    elapsed = time.monotonic() - start

    assert "no response within 0.3s" in str(excinfo.value)
    assert elapsed < 2.0


def test_slow_handler_is_cut_off_by_lookup_timeout():
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=PAYLOAD)

    with pytest.raises(GeoLookupError):
        resolve(make_resolver(handler, timeout=0.1), "93.184.216.34")
