import asyncio
import json
import unittest
from unittest.mock import AsyncMock, patch

import httpx

from simulark.common.errors import CircuitOpenError, ProviderError
from simulark.config.default_config import CONFIG
from simulark.engine.orchestrator import GenerationOrchestrator, process_response
from simulark.providers.circuit_breaker import CircuitBreaker
from simulark.providers.registry import ProviderRegistry

GRAPH = {
    "nodes": [
        {
            "id": "web",
            "type": "frontend",
            "position": {"x": 0, "y": 50},
            "data": {"label": "Next.js", "serviceType": "frontend"},
        },
        {
            "id": "db",
            "type": "database",
            "position": {"x": 0, "y": 400},
            "data": {"label": "Main DB", "tech": "PostgreSQL", "serviceType": "database"},
        },
    ],
    "edges": [{"id": "e1", "source": "web", "target": "db", "animated": True}],
}


def sse_body(text):
    events = [{"choices": [{"delta": {"reasoning_content": "planning"}}]}]
    events += [{"choices": [{"delta": {"content": text[i : i + 40]}}]} for i in range(0, len(text), 40)]
    return "".join(f"data: {json.dumps(e)}\n\n" for e in events).encode() + b"data: [DONE]\n\n"


def build_registry():
    config = dict(CONFIG)
    config["routing"] = {"primary_provider": "zhipu", "fallback_provider": "openrouter"}
    env = {"ZHIPU_API_KEY": "zhipu-test-key", "OPENROUTER_API_KEY": "openrouter-test-key"}
    return ProviderRegistry.from_config(config, env=env)


class FakeProviders:
    """MockTransport handler answering per provider host."""

    def __init__(self, registry, statuses=None):
        self.hosts = {httpx.URL(registry.get(p).base_url).host: p for p in registry.provider_ids}
        self.statuses = statuses or {}
        self.calls = []

    def __call__(self, request):
        provider = self.hosts[request.url.host]
        body = json.loads(request.content)
        self.calls.append((provider, body["model"]))
        status = self.statuses.get(provider, 200)
        if status != 200:
            return httpx.Response(status, json={"error": {"message": f"{provider} says no"}})
        return httpx.Response(200, content=sse_body(json.dumps(GRAPH)))


class TestGenerationOrchestrator(unittest.TestCase):
    def setUp(self):
        patcher = patch("simulark.providers.resilience.asyncio.sleep", new_callable=AsyncMock)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.registry = build_registry()
        self.breaker = CircuitBreaker()

    def _run(self, handler, coro_fn):
        async def go():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                orchestrator = GenerationOrchestrator(
                    self.registry, http_client=client, breaker=self.breaker
                )
                return await coro_fn(orchestrator)

        return asyncio.run(go())

    def _drain(self, handler, prompt="Build a blog with Next.js", **kwargs):
        async def drain(orchestrator):
            stream = await orchestrator.generate(prompt, **kwargs)
            chunks = [c async for c in stream]
            return stream.provider, chunks

        return self._run(handler, drain)

    def test_primary_success(self):
        providers = FakeProviders(self.registry)
        provider, chunks = self._drain(providers)
        self.assertEqual(provider, "zhipu")
        self.assertEqual(providers.calls, [("zhipu", "glm-4.7-flash")])
        self.assertEqual(chunks[0].type, "reasoning")
        content = "".join(c.text for c in chunks if c.type == "content")
        self.assertEqual(json.loads(content), GRAPH)
        self.assertEqual(self.breaker.get_status("zhipu").failures, 0)

    def test_falls_back_when_primary_fails(self):
        providers = FakeProviders(self.registry, statuses={"zhipu": 401})
        provider, _ = self._drain(providers)
        self.assertEqual(provider, "openrouter")
        self.assertEqual([p for p, _ in providers.calls], ["zhipu", "openrouter"])
        self.assertEqual(self.breaker.get_status("zhipu").failures, 1)

    def test_transient_primary_failure_is_retried_before_fallback(self):
        providers = FakeProviders(self.registry, statuses={"zhipu": 503})
        provider, _ = self._drain(providers)
        self.assertEqual(provider, "openrouter")
        self.assertEqual([p for p, _ in providers.calls], ["zhipu"] * 3 + ["openrouter"])

    def test_fallback_error_propagates(self):
        providers = FakeProviders(self.registry, statuses={"zhipu": 401, "openrouter": 402})
        with self.assertRaises(ProviderError) as ctx:
            self._drain(providers)
        self.assertEqual(ctx.exception.provider, "openrouter")
        self.assertEqual(ctx.exception.status_code, 402)

    def test_open_circuit_skips_primary(self):
        for _ in range(self.breaker.failure_threshold):
            self.breaker.record_failure("zhipu")
        providers = FakeProviders(self.registry)
        provider, _ = self._drain(providers)
        self.assertEqual(provider, "openrouter")
        self.assertEqual([p for p, _ in providers.calls], ["openrouter"])

    def test_explicit_model_uses_only_its_provider(self):
        providers = FakeProviders(self.registry)
        provider, _ = self._drain(providers, model_id="nvidia:minimaxai/minimax-m2.1")
        self.assertEqual(provider, "nvidia")
        self.assertEqual(providers.calls, [("nvidia", "minimaxai/minimax-m2.1")])

    def test_explicit_model_alias(self):
        providers = FakeProviders(self.registry)
        provider, _ = self._drain(providers, model_id="qwen3-max")
        self.assertEqual(provider, "qwen")
        self.assertEqual(providers.calls, [("qwen", "qwen3-max")])

    def test_explicit_model_failure_has_no_fallback(self):
        providers = FakeProviders(self.registry, statuses={"kimi": 401})
        with self.assertRaises(ProviderError):
            self._drain(providers, model_id="kimi-k2.5")
        self.assertEqual([p for p, _ in providers.calls], ["kimi"])

    def test_unknown_model_uses_default_chain(self):
        providers = FakeProviders(self.registry)
        provider, _ = self._drain(providers, model_id="gpt-9000")
        self.assertEqual(provider, "zhipu")

    def test_system_prompt_is_sent(self):
        seen = {}

        def handler(request):
            seen["messages"] = json.loads(request.content)["messages"]
            return httpx.Response(200, content=sse_body(json.dumps(GRAPH)))

        self._drain(handler, prompt="Build a serverless image resizer", mode="startup")
        self.assertEqual(seen["messages"][0]["role"], "system")
        self.assertIn("MODE: STARTUP", seen["messages"][0]["content"])
        self.assertEqual(seen["messages"][1], {"role": "user", "content": "Build a serverless image resizer"})

    def test_generate_architecture_returns_enriched_graph(self):
        providers = FakeProviders(self.registry)
        result = self._run(providers, lambda o: o.generate_architecture("Build a blog with Next.js"))
        self.assertTrue(result.success)
        self.assertEqual([n["id"] for n in result.data["nodes"]], ["web", "db"])
        self.assertEqual(result.data["nodes"][0]["data"]["tech"], "nextjs")
        self.assertEqual(result.data["nodes"][1]["data"]["logo"], "logos:postgresql")
        self.assertEqual(result.data["nodes"][1]["data"]["serviceType"], "database")


def test_process_response_reports_schema_failures():
    graph = {"nodes": [{"id": "a", "type": "mainframe", "position": {"x": 0, "y": 0}, "data": {"label": "A", "serviceType": "mainframe"}}], "edges": []}
    result = process_response(json.dumps(graph))
    assert not result.success
    assert result.error.startswith("Schema validation failed:")


def test_process_response_passes_parse_failures_through():
    result = process_response("not json at all")
    assert not result.success
    assert result.error.startswith("Failed to parse response:")


def test_circuit_open_error_is_a_provider_error():
    assert issubclass(CircuitOpenError, ProviderError)


def test_from_config_applies_retry_breaker_and_generation_settings():
    config = dict(CONFIG)
    config["retry"] = {
        **CONFIG["retry"],
        "provider_call": {"max_retries": 2, "base_delay": 0.5, "max_delay": 4.0, "exponential_base": 3.0},
    }
    config["circuit_breaker"] = {"failure_threshold": 5, "reset_timeout": 12.0, "half_open_max_calls": 1}
    config["generation"] = {"temperature": 0.2}

    orchestrator = GenerationOrchestrator.from_config(config, http_client=httpx.AsyncClient(), env={})

    assert orchestrator.resilience.policy.max_retries == 2
    assert orchestrator.resilience.policy.exponential_base == 3.0
    assert orchestrator.resilience.breaker is orchestrator.breaker
    assert orchestrator.breaker.failure_threshold == 5
    assert orchestrator.temperature == 0.2
    assert set(orchestrator.registry.provider_ids) == set(CONFIG["providers"])
