"""Unit tests for the Gemini provider adapter.

All HTTP is served by ``httpx.MockTransport``; tests cover the wire request
(golden bodies, key placement), response normalization, streaming callback
rules, and the cancellation and error classification policy.
"""
from __future__ import annotations

import asyncio
from typing import Any, List

import httpx
import pytest

from superdesign_providers.base.cancellation import CancellationToken, CancelledError
from superdesign_providers.base.errors import (
    AuthError,
    ConfigurationError,
    ContentBlockedError,
    TransportError,
)
from superdesign_providers.base.http import aclose_all_clients
from superdesign_providers.base.http import client as http_pool
from superdesign_providers.base.models import CanonicalMessage, QueryOptions
from superdesign_providers.gemini import GeminiApiProvider
from superdesign_providers.gemini.parsing import GeminiResponseNormalizer
from superdesign_providers.tests.fakes import (
    FakeSettings,
    RecordingTransport,
    capture_logger,
    json_response,
    text_response,
)

KEY = "AIza-test-key"  # pragma: allowlist secret - fake test credential


def _reply(*texts: Any) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts]}}]}


@pytest.fixture()
def settings() -> FakeSettings:
    return FakeSettings({"geminiApiKey": KEY})


@pytest.fixture()
def make_provider(settings, workspace, notifier, credentials):
    def _make(handler, logger=None) -> tuple[GeminiApiProvider, RecordingTransport]:
        transport = RecordingTransport(handler)
        provider = GeminiApiProvider(
            settings=settings,
            workspace=workspace,
            notifier=notifier,
            credentials=credentials,
            http_client=httpx.AsyncClient(transport=transport),
            logger=logger,
        )
        return provider, transport

    return _make


def test_identity_and_defaults(make_provider):
    provider, _ = make_provider(json_response(_reply("x")))
    assert provider.get_provider_name() == "Gemini API"
    assert provider.get_provider_type() == "api"
    assert provider.provider_key == "gemini"
    assert provider.get_model_id() == "gemini-1.5-pro-latest"
    assert provider.is_auth_error("Request had insufficient authentication PERMISSION")
    assert not provider.is_auth_error("invalid token")


@pytest.mark.asyncio
async def test_say_hi_scenario(make_provider, golden, credentials):
    provider, transport = make_provider(json_response(_reply("Hi!")))
    streamed: List[CanonicalMessage] = []

    result = await provider.query("Say hi", on_message=streamed.append)

    assert [m.to_dict() for m in result] == [
        {"type": "assistant", "role": "assistant", "message": "Hi!", "content": "Hi!", "text": "Hi!"}
    ]
    assert streamed == result
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-1.5-pro-latest:generateContent"
    assert request.url.params["key"] == KEY
    assert request.headers["content-type"] == "application/json"
    assert "authorization" not in request.headers
    assert transport.last_json() == golden("gemini_say_hi")
    assert credentials.get("GOOGLE_GENERATIVE_AI_API_KEY") == KEY


@pytest.mark.asyncio
async def test_system_prompt_and_max_turns_golden(make_provider, golden):
    provider, transport = make_provider(json_response(_reply("ok")))
    options = {"customSystemPrompt": " You are a UI designer. ", "maxTurns": 4}
    await provider.query("Design a login form", options)
    assert transport.last_json() == golden("gemini_system_single_candidate")


@pytest.mark.asyncio
@pytest.mark.parametrize("options", [QueryOptions(custom_system_prompt="   ", max_turns=0), None])
async def test_blank_system_prompt_and_zero_max_turns_are_omitted(make_provider, golden, options):
    provider, transport = make_provider(json_response(_reply("ok")))
    await provider.query("Say hi", options)
    assert transport.last_json() == golden("gemini_say_hi")


@pytest.mark.asyncio
async def test_none_prompt_is_sent_as_empty_string(make_provider):
    provider, transport = make_provider(json_response(_reply("ok")))
    await provider.query(None)
    assert transport.last_json()["contents"][0]["parts"] == [{"text": ""}]


@pytest.mark.asyncio
async def test_configured_model_and_base_url_override(settings, workspace, notifier, credentials):
    settings.values["geminiModel"] = "  gemini-1.5-flash  "
    transport = RecordingTransport(json_response(_reply("ok")))
    provider = GeminiApiProvider(
        settings=settings,
        workspace=workspace,
        notifier=notifier,
        credentials=credentials,
        http_client=httpx.AsyncClient(transport=transport),
        base_url="http://proxy.local/",
    )
    await provider.query("hi")
    url = transport.requests[0].url
    assert url.host == "proxy.local"
    assert url.path == "/v1beta/models/gemini-1.5-flash:generateContent"


@pytest.mark.asyncio
async def test_parts_are_filtered_and_joined(make_provider):
    body = {"candidates": [{"content": {"parts": [{"text": " Hello"}, {"inlineData": {}}, {"text": "  "}, {"text": "world "}]}}]}
    provider, _ = make_provider(json_response(body))
    [message] = await provider.query("x")
    assert message.text == "Hello\nworld"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
        {"candidates": []},
        {},
        [],
    ],
)
async def test_empty_text_is_returned_but_not_streamed(make_provider, body):
    provider, _ = make_provider(json_response(body))
    streamed: List[CanonicalMessage] = []
    result = await provider.query("x", on_message=streamed.append)
    assert result == [CanonicalMessage.from_text("")]
    assert result[0].message == result[0].content == result[0].text == ""
    assert streamed == []


@pytest.mark.asyncio
async def test_blocked_prompt_raises_and_notifies(make_provider, notifier):
    body = {"promptFeedback": {"blockReason": "SAFETY"}, "candidates": [{"content": {"parts": [{"text": "ignored"}]}}]}
    provider, _ = make_provider(json_response(body))
    streamed: List[CanonicalMessage] = []
    with pytest.raises(ContentBlockedError) as info:
        await provider.query("x", on_message=streamed.append)
    assert info.value.reason == "SAFETY"
    assert str(info.value) == "Gemini blocked the prompt: SAFETY"
    assert notifier.errors == ["Gemini API query failed: Gemini blocked the prompt: SAFETY"]
    assert streamed == []


def test_normalizer_ignores_empty_block_reason():
    message = GeminiResponseNormalizer().parse({"promptFeedback": {"blockReason": ""}, **_reply("ok")})
    assert message.text == "ok"


@pytest.mark.asyncio
async def test_401_invalid_api_key_is_auth_error_without_popup(make_provider, notifier):
    provider, _ = make_provider(text_response('{"error": {"message": "invalid api key"}}', 401))
    with pytest.raises(AuthError) as info:
        await provider.query("x")
    assert provider.is_auth_error(str(info.value)) is True
    assert info.value.status_code == 401
    assert str(info.value).startswith("Gemini API error (401): ")
    assert isinstance(info.value.raw, TransportError)
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_server_error_notifies_and_propagates(make_provider, notifier):
    provider, _ = make_provider(text_response("upstream exploded", 500))
    with pytest.raises(TransportError) as info:
        await provider.query("x")
    assert info.value.status_code == 500
    assert info.value.body == "upstream exploded"
    assert str(info.value) == "Gemini API error (500): upstream exploded"
    assert notifier.errors == ["Gemini API query failed: Gemini API error (500): upstream exploded"]


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(make_provider, notifier):
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider, _ = make_provider(_boom)
    with pytest.raises(TransportError) as info:
        await provider.query("x")
    assert info.value.status_code is None
    assert isinstance(info.value.raw, httpx.ConnectError)
    assert len(notifier.errors) == 1


@pytest.mark.asyncio
async def test_non_json_success_body_is_transport_error(make_provider):
    provider, _ = make_provider(text_response("<html>proxy login</html>", 200))
    with pytest.raises(TransportError, match="non-JSON"):
        await provider.query("x")


@pytest.mark.asyncio
async def test_pre_cancelled_token_sends_nothing(make_provider, notifier):
    provider, transport = make_provider(json_response(_reply("Hi!")))
    token = CancellationToken()
    token.cancel("user")
    with pytest.raises(CancelledError, match="^Gemini request was cancelled$"):
        await provider.query("x", cancel_token=token)
    assert transport.requests == []
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_cancel_during_request_aborts_call(make_provider, notifier):
    started = asyncio.Event()

    async def _hang(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(3600)
        return httpx.Response(200, json=_reply("late"))

    provider, transport = make_provider(_hang)
    token = CancellationToken()
    streamed: List[CanonicalMessage] = []
    task = asyncio.ensure_future(provider.query("x", cancel_token=token, on_message=streamed.append))
    await asyncio.wait_for(started.wait(), timeout=1)
    token.cancel("user")
    with pytest.raises(CancelledError, match="Gemini request was cancelled"):
        await asyncio.wait_for(task, timeout=1)
    assert len(transport.requests) == 1
    assert streamed == []
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_cancellation_wins_over_transport_failure(make_provider, notifier):
    token = CancellationToken()

    def _cancel_then_fail(request: httpx.Request) -> httpx.Response:
        token.cancel("user")
        return httpx.Response(401, text="invalid api key")

    provider, _ = make_provider(_cancel_then_fail)
    with pytest.raises(CancelledError) as info:
        await provider.query("x", cancel_token=token)
    assert not isinstance(info.value, TransportError)
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_key_removed_after_initialization(make_provider, settings, notifier, credentials):
    provider, transport = make_provider(json_response(_reply("Hi!")))
    await provider.initialize()
    settings.values["geminiApiKey"] = "  "
    with pytest.raises(ConfigurationError) as info:
        await provider.query("x")
    assert str(info.value) == 'Gemini API key is not configured. Please run "Configure Gemini API Key" command.'
    assert transport.requests == []
    assert notifier.errors == []
    assert provider.is_ready()


@pytest.mark.asyncio
async def test_query_without_key_fails_initialization(workspace, notifier, credentials):
    transport = RecordingTransport(json_response(_reply("Hi!")))
    provider = GeminiApiProvider(
        settings=FakeSettings({}),
        workspace=workspace,
        notifier=notifier,
        credentials=credentials,
        http_client=httpx.AsyncClient(transport=transport),
    )
    with pytest.raises(ConfigurationError, match="Missing Gemini API key"):
        await provider.query("x")
    assert provider.is_ready() is False
    assert transport.requests == []
    assert notifier.errors == []


@pytest.mark.asyncio
async def test_structured_events_never_leak_the_key(make_provider):
    logger, handler = capture_logger("gemini.events")
    provider, _ = make_provider(json_response(_reply("Hi!")), logger=logger)
    await provider.query("Say hi")
    names = handler.names()
    for expected in ("init.start", "init.workspace", "init.ready", "query.start", "query.end"):
        assert expected in names
    start = next(e for e in handler.events if e["event"] == "query.start")
    assert start["provider"] == "gemini" and start["model"] == "gemini-1.5-pro-latest"
    assert start["url"].endswith("?key=***")
    assert all(KEY not in r.getMessage() for r in handler.records)


@pytest.mark.asyncio
async def test_private_client_when_timeout_given(settings, workspace, notifier, credentials):
    provider = GeminiApiProvider(
        settings=settings,
        workspace=workspace,
        notifier=notifier,
        credentials=credentials,
        timeout_seconds=5,
    )
    client = provider._client()
    assert client is provider._client()
    assert client.timeout.read == 5
    await provider.aclose()
    assert client.is_closed


def test_pooled_client_serves_queries_from_separate_event_loops(
    settings, workspace, notifier, credentials, monkeypatch
):
    transport = RecordingTransport(json_response(_reply("Hi!")))
    real_client = httpx.AsyncClient
    created: List[httpx.AsyncClient] = []

    def _client_with_transport(**kwargs: Any) -> httpx.AsyncClient:
        client = real_client(transport=transport, **kwargs)
        created.append(client)
        return client

    monkeypatch.setattr(http_pool.httpx, "AsyncClient", _client_with_transport)
    provider = GeminiApiProvider(settings=settings, workspace=workspace, notifier=notifier, credentials=credentials)

    async def _ask() -> List[CanonicalMessage]:
        return await asyncio.wait_for(provider.query("Say hi"), timeout=5)

    first = asyncio.run(_ask())
    second = asyncio.run(_ask())

    assert [m.text for m in first] == [m.text for m in second] == ["Hi!"]
    assert len(transport.requests) == 2
    # one pooled client per loop, never one bound to a finished loop
    assert len(created) == 2 and created[0] is not created[1]
    assert notifier.errors == []
    asyncio.run(aclose_all_clients())
