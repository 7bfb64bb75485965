import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from simulark.common.errors import ErrorCause, ProviderError, StreamInterruptedError
from simulark.common.models import ProviderDescriptor, StreamChunk

logger = logging.getLogger("Simulark")


def as_provider_error(provider: str, exc: httpx.HTTPError) -> ProviderError:
    """Wraps an httpx transport failure with a structured cause."""
    if isinstance(exc, httpx.TimeoutException):
        cause = ErrorCause.TIMEOUT
    elif isinstance(exc, httpx.ConnectError):
        cause = ErrorCause.CONNECTION_REFUSED
    elif isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError)):
        cause = ErrorCause.NETWORK
    else:
        cause = ErrorCause.UNKNOWN

    status = None
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        cause = ErrorCause.HTTP

    detail = str(exc) or exc.__class__.__name__
    return ProviderError(
        f"{provider} request failed ({cause.value}): {detail}",
        provider=provider,
        status_code=status,
        cause=cause,
    )


def _error_detail(body: bytes) -> str:
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:200]
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            return str(error.get("message", error))[:200]
        if error:
            return str(error)[:200]
        if "message" in data:
            return str(data["message"])[:200]
    return json.dumps(data, ensure_ascii=False)[:200]


def chunks_from_payload(payload: Dict[str, Any]) -> List[StreamChunk]:
    """Extracts reasoning and content deltas from one chat.completion.chunk."""
    choices = payload.get("choices") or []
    if not choices:
        return []
    delta = choices[0].get("delta") or {}

    chunks = []
    # Zhipu sends reasoning_content, OpenRouter sends reasoning
    reasoning = delta.get("reasoning_content") or delta.get("reasoning")
    if isinstance(reasoning, str) and reasoning:
        chunks.append(StreamChunk(type="reasoning", text=reasoning))
    content = delta.get("content")
    if isinstance(content, str) and content:
        chunks.append(StreamChunk(type="content", text=content))
    return chunks


class ModelStream:
    """Async iterator of StreamChunk over one open provider response.

    `prime()` reads up to the first chunk. Failures before that point are
    ordinary ProviderErrors (retried, counted by the breaker); failures after
    it surface as StreamInterruptedError so delivered tokens are never
    replayed.
    """

    def __init__(self, provider: str, response: httpx.Response):
        self.provider = provider
        self._response = response
        self._lines = response.aiter_lines()
        self._pending: List[StreamChunk] = []
        self._primed = False
        self._finished = False
        self.chunks_delivered = 0

    async def _read_event(self) -> Optional[List[StreamChunk]]:
        """Returns the chunks of the next non-empty data event, or None at end."""
        while True:
            try:
                line = await self._lines.__anext__()
            except StopAsyncIteration:
                return None

            if not line.startswith("data:"):
                continue
            data = line[5:].strip()
            if data == "[DONE]":
                return None

            try:
                payload = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"[{self.provider}] Could not parse stream chunk: '{data[:200]}'")
                continue

            if "error" in payload:
                error = payload["error"]
                message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
                code = error.get("code") if isinstance(error, dict) else None
                logger.error(f"[{self.provider}] Stream Error: {message}")
                raise ProviderError(
                    f"{self.provider} stream error: {message}",
                    provider=self.provider,
                    status_code=code if isinstance(code, int) else None,
                    cause=ErrorCause.HTTP,
                )

            chunks = chunks_from_payload(payload)
            if chunks:
                return chunks

    async def prime(self) -> None:
        if self._primed:
            return
        try:
            chunks = await self._read_event()
        except httpx.HTTPError as e:
            raise as_provider_error(self.provider, e) from e
        if chunks is None:
            raise ProviderError(
                f"{self.provider} returned an empty stream",
                provider=self.provider,
                cause=ErrorCause.STREAM,
            )
        self._pending.extend(chunks)
        self._primed = True

    def __aiter__(self):
        return self

    async def __anext__(self) -> StreamChunk:
        if not self._primed:
            await self.prime()

        if not self._pending:
            if self._finished:
                raise StopAsyncIteration
            try:
                chunks = await self._read_event()
            except (httpx.HTTPError, ProviderError) as e:
                self._finished = True
                await self.aclose()
                logger.error(
                    f"[{self.provider}] Stream interrupted after {self.chunks_delivered} chunks: {e}"
                )
                raise StreamInterruptedError(
                    f"{self.provider} stream interrupted after {self.chunks_delivered} chunks: {e}",
                    provider=self.provider,
                    chunks_delivered=self.chunks_delivered,
                ) from e
            if chunks is None:
                self._finished = True
                await self.aclose()
                raise StopAsyncIteration
            self._pending.extend(chunks)

        self.chunks_delivered += 1
        return self._pending.pop(0)

    async def aclose(self) -> None:
        await self._response.aclose()


async def open_chat_stream(
    client: httpx.AsyncClient,
    provider: ProviderDescriptor,
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
) -> ModelStream:
    """Opens a streamed chat completion and waits for its first chunk.

    Args:
        client: Shared async HTTP client.
        provider: Connection parameters of the target provider.
        messages: OpenAI-style chat messages.
        model: Model name override; defaults to the provider's model.
        temperature: Sampling temperature, omitted when None.

    Returns:
        A primed ModelStream. The caller must iterate or aclose() it.

    Raises:
        ProviderError: on transport failure, HTTP error status, an in-band
            error event or an empty stream, all before any output.
    """
    url = f"{provider.base_url.rstrip('/')}/chat/completions"
    headers = {"Content-Type": "application/json", **provider.headers}
    if provider.api_key:
        headers["Authorization"] = f"Bearer {provider.api_key}"

    payload: Dict[str, Any] = {
        "model": model or provider.model,
        "messages": messages,
        "stream": True,
    }
    if temperature is not None:
        payload["temperature"] = temperature
    payload.update(provider.request_params)

    logger.info(f"[{provider.id}] Starting stream for model: {payload['model']}")

    request = client.build_request(
        "POST", url, json=payload, headers=headers, timeout=provider.timeout
    )
    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as e:
        raise as_provider_error(provider.id, e) from e

    if response.status_code >= 400:
        try:
            body = await response.aread()
        except httpx.HTTPError:
            body = b""
        finally:
            await response.aclose()
        raise ProviderError(
            f"{provider.id} returned HTTP {response.status_code}: {_error_detail(body)}",
            provider=provider.id,
            status_code=response.status_code,
            cause=ErrorCause.HTTP,
        )

    stream = ModelStream(provider.id, response)
    try:
        await stream.prime()
    except BaseException:
        await stream.aclose()
        raise
    return stream
