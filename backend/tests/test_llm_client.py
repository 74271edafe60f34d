"""Tests for the remote model gateway (httpx transport mocked, no network)."""

import asyncio
import json

import httpx
import pytest

from fra_advisor.pipeline.llm_client import ModelGateway, ModelGatewayError

BASE_URL = "https://model.test/v1"


# ═══════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════

def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _gateway(handler, timeout=5.0, api_key="sk-test"):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return ModelGateway(api_key=api_key, base_url=BASE_URL, model="test-model",
                        timeout=timeout, client=client)


# ═══════════════════════════════════════════════════
# generate()
# ═══════════════════════════════════════════════════

class TestGenerate:

    @pytest.mark.asyncio
    async def test_success_returns_content(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("Recommended: PMKSY"))

        gateway = _gateway(handler)
        text = await gateway.generate("prompt text", max_tokens=800, temperature=0.3, task_label="fraud")
        assert text == "Recommended: PMKSY"
        assert seen["path"] == "/v1/chat/completions"
        assert seen["body"]["model"] == "test-model"
        assert seen["body"]["max_tokens"] == 800
        assert seen["body"]["temperature"] == 0.3
        assert seen["body"]["messages"] == [{"role": "user", "content": "prompt text"}]

    @pytest.mark.asyncio
    async def test_not_configured(self):
        gateway = ModelGateway(api_key="", base_url=BASE_URL)
        assert not gateway.enabled
        with pytest.raises(ModelGatewayError, match="not configured"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_quota_exceeded(self):
        gateway = _gateway(lambda r: httpx.Response(429, json={"error": "quota"}))
        with pytest.raises(ModelGatewayError, match="quota exceeded"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_server_error(self):
        gateway = _gateway(lambda r: httpx.Response(503))
        with pytest.raises(ModelGatewayError, match="HTTP 503"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = _gateway(handler)
        with pytest.raises(ModelGatewayError, match="HTTP error"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json=_completion("late"))

        gateway = _gateway(handler, timeout=0.05)
        with pytest.raises(ModelGatewayError, match="Timeout"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_malformed_response(self):
        gateway = _gateway(lambda r: httpx.Response(200, json={"choices": []}))
        with pytest.raises(ModelGatewayError, match="Malformed"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        gateway = _gateway(lambda r: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(ModelGatewayError, match="Malformed"):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_empty_content(self):
        gateway = _gateway(lambda r: httpx.Response(200, json=_completion("   ")))
        with pytest.raises(ModelGatewayError, match="Empty"):
            await gateway.generate("p")


# ═══════════════════════════════════════════════════
# Lifecycle & status
# ═══════════════════════════════════════════════════

class TestLifecycle:

    @pytest.mark.asyncio
    async def test_closed_gateway_disabled(self):
        gateway = _gateway(lambda r: httpx.Response(200, json=_completion("x")))
        assert gateway.enabled
        await gateway.aclose()
        await gateway.aclose()
        assert not gateway.enabled
        with pytest.raises(ModelGatewayError):
            await gateway.generate("p")

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_owned_client(self):
        async with ModelGateway(api_key="sk-test", base_url=BASE_URL) as gateway:
            assert gateway.enabled
            client = gateway._client
        assert client.is_closed
        assert not gateway.enabled

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        gateway = ModelGateway(api_key="sk-test", base_url=BASE_URL, client=client)
        await gateway.aclose()
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_status_online(self):
        gateway = _gateway(lambda r: httpx.Response(200, json={"data": []}))
        assert (await gateway.status())["status"] == "online"

    @pytest.mark.asyncio
    async def test_status_offline(self):
        gateway = _gateway(lambda r: httpx.Response(500))
        status = await gateway.status()
        assert status["status"] == "offline"
        assert "error" in status

    @pytest.mark.asyncio
    async def test_status_disabled(self):
        gateway = ModelGateway(api_key="", base_url=BASE_URL)
        assert (await gateway.status())["status"] == "disabled"
