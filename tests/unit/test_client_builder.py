# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from fakes import RESPONSE, ApiProblem, Recorder, TransportFailure
from httpbuilder.errors import BuilderConfigurationError, InvalidHeadersError
from httpbuilder.http.adapters import ClientConfig, StubRequestAdapter, VendorAdapters
from httpbuilder.http.client import Client, ClientFactory, get_builder
from httpbuilder.http.models import RequestDescriptor, RequestFragments

BASE_URL = "http://localhost:3000/api"
PATH = "/users"
CONTENT_TYPE = {"Content-Type": "application/json"}
USER_AGENT = {"User-Agent": "MyApp 1.0.0 (http://myapp.com) Python"}
AUTH = {"Authorization": "Bearer 1234567890"}


@pytest.fixture
def producers():
    return Recorder(lambda: dict(CONTENT_TYPE)), Recorder(lambda: dict(USER_AGENT))


@pytest.fixture
def client(vendor, producers):
    defaults, fixed = producers
    build = get_builder(vendor.request, vendor.response, vendor.error)
    return build(base_url=BASE_URL, get_default_headers=defaults, get_fixed_headers=fixed)


def _descriptor(**overrides):
    fields = {"url": BASE_URL + PATH, "method": "GET", "headers": {**CONTENT_TYPE, **USER_AGENT}, "attempt_number": 1}
    fields.update(overrides)
    return RequestDescriptor(**fields)


def test_get_builder_returns_a_client_factory(vendor):
    build = get_builder(vendor.request, vendor.response, vendor.error)
    assert isinstance(build, ClientFactory)
    assert isinstance(build(), Client)


def test_get_builder_accepts_vendor_adapters(vendor):
    adapters = VendorAdapters(vendor.request, vendor.response, vendor.error)
    assert get_builder(vendor=adapters).vendor is adapters
    with pytest.raises(BuilderConfigurationError):
        get_builder(vendor.request, vendor=adapters)


def test_missing_vendor_adapter_is_rejected(vendor):
    with pytest.raises(BuilderConfigurationError):
        get_builder(vendor.request, vendor.response)


def test_factory_rejects_config_mixed_with_keywords(vendor):
    build = get_builder(vendor.request, vendor.response, vendor.error)
    config = ClientConfig(base_url=BASE_URL)
    assert build(config).config is config
    with pytest.raises(BuilderConfigurationError):
        build(config, base_url="https://other.test")
    with pytest.raises(BuilderConfigurationError):
        build(success_handler="not callable")


def test_clients_from_one_factory_share_vendor_but_not_config(vendor):
    build = get_builder(vendor.request, vendor.response, vendor.error)
    first = build(base_url="https://one.test")
    second = build(base_url="https://two.test")
    assert first.base_url == "https://one.test"
    assert second.base_url == "https://two.test"


@pytest.mark.asyncio
async def test_get_appends_path_and_applies_default_and_fixed_headers(client, vendor, producers):
    defaults, fixed = producers
    response = await client.get(PATH)
    assert len(defaults.calls) == 1
    assert len(fixed.calls) == 1
    assert vendor.request.calls == [(_descriptor(),)]
    assert vendor.response.calls == [(RESPONSE,)]
    assert not vendor.error.called
    assert response == RESPONSE["data"]


@pytest.mark.asyncio
async def test_get_builds_query_string(client, vendor):
    await client.get(PATH, query_params={"firstName": "peter", "lastName": "parker"})
    (request,) = vendor.request.calls[0]
    assert request.url == BASE_URL + PATH + "?firstName=peter&lastName=parker"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["post", "put", "patch"])
async def test_body_verbs_send_json_data(client, vendor, method):
    payload = {"add": "user"}
    response = await getattr(client, method)(PATH, payload)
    assert vendor.request.calls == [(_descriptor(method=method.upper(), body='{"add":"user"}'),)]
    assert response == RESPONSE["data"]


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["delete", "options"])
async def test_bodyless_verbs_send_no_body(client, vendor, method):
    await getattr(client, method)(PATH, path_params=[7])
    assert vendor.request.calls == [(_descriptor(method=method.upper(), url=BASE_URL + PATH + "/7"),)]


@pytest.mark.asyncio
async def test_send_with_absolute_url_and_path_params(client, vendor):
    await client.send(url="https://lol.com/overridingBaseUrl", path_params=["users", "123"])
    assert vendor.request.calls == [(_descriptor(url="https://lol.com/overridingBaseUrl/users/123"),)]


@pytest.mark.asyncio
async def test_send_without_anything_targets_base_url(client, vendor):
    await client.send()
    assert vendor.request.calls == [(_descriptor(url=BASE_URL),)]


@pytest.mark.asyncio
async def test_send_accepts_mappings_and_fragments(client, vendor):
    data = "grant_type=password&username=foo&password=bar"
    await client.send({"method": "POST", "data": data})
    await client.send(RequestFragments(method="PUT"), data=data)
    first, second = (call[0] for call in vendor.request.calls)
    assert (first.method, first.body, first.url) == ("POST", data, BASE_URL)
    assert (second.method, second.body) == ("PUT", data)


@pytest.mark.asyncio
async def test_null_headers_skip_both_producers(client, vendor, producers):
    defaults, fixed = producers
    await client.send({"headers": None})
    await client.get(PATH, headers=None)
    assert all(call[0].headers is None for call in vendor.request.calls)
    assert not defaults.called
    assert not fixed.called


@pytest.mark.asyncio
async def test_explicit_headers_skip_defaults_but_keep_fixed(client, vendor, producers):
    defaults, fixed = producers
    await client.get(PATH, headers=AUTH)
    assert not defaults.called
    assert len(fixed.calls) == 1
    assert vendor.request.calls == [(_descriptor(headers={**AUTH, **USER_AGENT}),)]


@pytest.mark.asyncio
async def test_fixed_headers_win_over_explicit_ones(client, vendor):
    await client.get(PATH, headers={"User-Agent": "Overridden", **AUTH})
    (request,) = vendor.request.calls[0]
    assert request.headers == {**AUTH, **USER_AGENT}


@pytest.mark.asyncio
async def test_invalid_headers_fail_before_transport(client, vendor):
    with pytest.raises(InvalidHeadersError):
        await client.get(PATH, headers="Accept: */*")
    assert not vendor.request.called


@pytest.mark.asyncio
async def test_attempt_number_passes_through(client, vendor):
    await client.get(PATH, attempt_number=4)
    (request,) = vendor.request.calls[0]
    assert request.attempt_number == 4


@pytest.mark.asyncio
async def test_scenario_get_with_query_params_and_no_policy(vendor):
    api = get_builder(vendor.request, vendor.response, vendor.error)(base_url="https://api.test/v1")
    await api.get("/users", query_params={"id": "5"})
    assert vendor.request.calls == [
        (RequestDescriptor(method="GET", url="https://api.test/v1/users?id=5", headers={}, attempt_number=1),)
    ]


@pytest.mark.asyncio
async def test_scenario_post_without_policy(vendor):
    api = get_builder(vendor.request, vendor.response, vendor.error)(base_url="https://api.test/v1")
    await api.post("/users", {"name": "a"})
    (request,) = vendor.request.calls[0]
    assert request.method == "POST"
    assert request.body == '{"name":"a"}'


@pytest.mark.asyncio
async def test_client_without_base_url_uses_absolute_urls(vendor):
    success = Recorder(lambda res, req: {**res, "smtg": "1"})
    api = get_builder(vendor.request, vendor.response, vendor.error)(success_handler=success)
    result = await api.get(BASE_URL)
    expected = RequestDescriptor(url=BASE_URL, method="GET", headers={}, attempt_number=1)
    assert success.calls == [(RESPONSE["data"], expected)]
    assert result == {"lol": "ok", "smtg": "1"}


@pytest.mark.asyncio
async def test_rejection_without_failure_handler_propagates_adapted_error(client, vendor):
    problem = ApiProblem({"lol": "error"})

    async def reject(_request):
        raise TransportFailure(problem)

    vendor.request.once(reject)
    with pytest.raises(ApiProblem) as excinfo:
        await client.get(PATH)
    assert excinfo.value is problem
    assert not vendor.response.called


@pytest.mark.asyncio
async def test_stub_request_adapter_drives_a_client():
    stub = StubRequestAdapter({"https://api.test/ping": {"data": "pong"}})

    def error_adapter(exc):
        raise exc

    api = get_builder(stub, lambda res: res["data"], error_adapter)(base_url="https://api.test")
    assert await api.get("/ping") == "pong"
    with pytest.raises(LookupError):
        await api.get("/missing")
    assert [request.url for request in stub.requests] == ["https://api.test/ping", "https://api.test/missing"]


def test_client_exposes_crude_query_string_builder(client):
    assert client.build_crude_query_string({"a": 1, "b": "two"}) == "a=1&b=two"
