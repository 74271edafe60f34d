"""Remote model gateway for OpenAI-compatible chat completion endpoints.

The gateway is an explicitly constructed object with an explicit lifecycle:
the application creates one at startup, injects it into the pipeline and
closes it at shutdown (``await gateway.aclose()`` or ``async with``).

Contract: one prompt plus generation parameters in, free text out. Any
failure (not configured, timeout, HTTP/quota error, malformed or empty
response) raises :class:`ModelGatewayError`. There are no retries here;
callers fall back to the local engine instead.
"""

import time
import asyncio
import httpx
import logging

from fra_advisor.config import MODEL_API_KEY, MODEL_BASE_URL, MODEL_NAME, MODEL_TIMEOUT

logger = logging.getLogger(__name__)


class ModelGatewayError(RuntimeError):
    """The remote model could not produce a usable answer."""


class ModelGateway:
    def __init__(
        self,
        api_key: str = MODEL_API_KEY,
        base_url: str = MODEL_BASE_URL,
        model: str = MODEL_NAME,
        timeout: float = MODEL_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client
        if self._client is None and self.api_key:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        self._closed = False

    @property
    def enabled(self) -> bool:
        return bool(self.api_key) and self._client is not None and not self._closed

    async def __aenter__(self) -> "ModelGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP client. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._client is not None and self._owns_client:
            await self._client.aclose()

    async def generate(
        self,
        prompt: str,
        *,
        max_tokens: int = 1000,
        temperature: float = 0.6,
        task_label: str = "",
    ) -> str:
        """Send ``prompt`` and return the model's text.

        Raises:
            ModelGatewayError: on any failure, including the timeout.
        """
        label = task_label or "Model call"
        if not self.enabled:
            raise ModelGatewayError(f"[{label}] Remote model not configured")

        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        t0 = time.time()
        try:
            response = await asyncio.wait_for(
                self._client.post("/chat/completions", json=body),
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
            content = result["choices"][0]["message"]["content"]
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ModelGatewayError(f"[{label}] Timeout after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            reason = "quota exceeded" if status == 429 else f"HTTP {status}"
            raise ModelGatewayError(f"[{label}] {reason}") from e
        except httpx.HTTPError as e:
            raise ModelGatewayError(f"[{label}] HTTP error: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ModelGatewayError(f"[{label}] Malformed response: {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise ModelGatewayError(f"[{label}] Empty response from model")

        elapsed = time.time() - t0
        logger.info(f"[{label}] Model responded in {elapsed:.1f}s ({len(content):,} chars)")
        return content

    async def status(self) -> dict:
        """Report whether the remote model is configured and reachable."""
        if not self.enabled:
            return {"status": "disabled", "model": self.model}
        try:
            resp = await asyncio.wait_for(self._client.get("/models"), timeout=self.timeout)
            resp.raise_for_status()
            return {"status": "online", "model": self.model}
        except (asyncio.TimeoutError, httpx.HTTPError) as e:
            return {"status": "offline", "model": self.model, "error": str(e) or type(e).__name__}
