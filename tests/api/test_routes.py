import json
import unittest

import httpx
from fastapi.testclient import TestClient

from simulark.api.middleware.rate_limit import get_limiter, limiter
from simulark.api.server import app
from simulark.config.default_config import CONFIG
from simulark.engine.orchestrator import GenerationOrchestrator
from simulark.providers.circuit_breaker import CircuitBreaker
from simulark.providers.registry import ProviderRegistry

GRAPH = {
    "nodes": [
        {
            "id": "api",
            "type": "backend",
            "position": {"x": 0, "y": 200},
            "data": {"label": "FastAPI", "serviceType": "backend"},
        }
    ],
    "edges": [],
}


def sse(*deltas):
    lines = [f"data: {json.dumps({'choices': [{'delta': d}]})}\n\n" for d in deltas]
    return ("".join(lines) + "data: [DONE]\n\n").encode()


def events(response):
    return [json.loads(line) for line in response.text.splitlines() if line.strip()]


class TestRoutes(unittest.TestCase):
    def setUp(self):
        limiter.reset()
        self.responses = []
        self.calls = []

        def handler(request):
            self.calls.append(request.url.host)
            return self.responses.pop(0)

        config = dict(CONFIG)
        config["routing"] = {"primary_provider": "zhipu", "fallback_provider": "openrouter"}
        self.registry = ProviderRegistry.from_config(config, env={"ZHIPU_API_KEY": "zhipu-test-key"})
        self.breaker = CircuitBreaker()
        self.http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app.state.registry = self.registry
        app.state.circuit_breaker = self.breaker
        app.state.orchestrator = GenerationOrchestrator(
            self.registry, http_client=self.http_client, breaker=self.breaker
        )
        self.client = TestClient(app)

    def test_generate_streams_tokens_then_result(self):
        content = json.dumps(GRAPH)
        self.responses.append(
            httpx.Response(200, content=sse({"reasoning_content": "hmm"}, {"content": content[:20]}, {"content": content[20:]}))
        )
        response = self.client.post("/api/generate", json={"prompt": "Build a REST API with FastAPI"})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("application/x-ndjson"))
        lines = events(response)
        self.assertEqual(lines[0], {"type": "reasoning", "data": "hmm"})
        self.assertEqual([e["type"] for e in lines[1:3]], ["content", "content"])
        self.assertEqual(lines[-1]["type"], "result")
        self.assertEqual(lines[-1]["data"]["nodes"][0]["data"]["tech"], "fastapi")

    def test_generate_accepts_camel_case_body(self):
        self.responses.append(httpx.Response(200, content=sse({"content": json.dumps(GRAPH)})))
        body = {
            "prompt": "add a redis cache",
            "mode": "startup",
            "quickMode": True,
            "currentNodes": GRAPH["nodes"],
            "currentEdges": [],
            "userPreferences": {"cloudProviders": ["aws"]},
        }
        response = self.client.post("/api/generate", json=body)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(events(response)[-1]["type"], "result")

    def test_invalid_prompt_is_rejected(self):
        response = self.client.post("/api/generate", json={"prompt": "hi"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("too short", response.json()["error"])
        self.assertTrue(response.json()["suggestedPrompts"])
        self.assertEqual(self.calls, [])

    def test_provider_failure_is_an_error_event(self):
        self.responses.append(httpx.Response(401, json={"error": {"message": "bad key"}}))
        self.responses.append(httpx.Response(401, json={"error": {"message": "no key"}}))
        response = self.client.post("/api/generate", json={"prompt": "Build a blog platform"})

        self.assertEqual(response.status_code, 200)
        lines = events(response)
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0]["type"], "error")
        self.assertTrue(lines[0]["error"].startswith("Generation failed:"))
        self.assertIn("no key", lines[0]["error"])

    def test_unparseable_output_is_an_error_event(self):
        self.responses.append(httpx.Response(200, content=sse({"content": "Sorry, I can't help."})))
        response = self.client.post("/api/generate", json={"prompt": "Build a blog platform"})
        lines = events(response)
        self.assertEqual(lines[0], {"type": "content", "data": "Sorry, I can't help."})
        self.assertEqual(lines[-1]["type"], "error")

    def _interrupted(self, content):
        body = sse({"content": content}).replace(b"data: [DONE]\n\n", b"")
        body += f"data: {json.dumps({'error': {'message': 'upstream reset'}})}\n\n".encode()
        self.responses.append(httpx.Response(200, content=body))
        return events(self.client.post("/api/generate", json={"prompt": "Build a REST API with FastAPI"}))

    def test_interrupted_stream_with_usable_graph_sends_partial(self):
        lines = self._interrupted(json.dumps(GRAPH))
        self.assertEqual([e["type"] for e in lines], ["content", "partial", "error"])
        self.assertEqual(lines[1]["data"]["nodes"][0]["data"]["tech"], "fastapi")
        self.assertIn("upstream reset", lines[2]["error"])

    def test_interrupted_stream_with_truncated_graph_has_no_partial(self):
        lines = self._interrupted(json.dumps(GRAPH)[:30])
        self.assertEqual([e["type"] for e in lines], ["content", "error"])

    def test_interrupted_stream_with_invalid_nodes_has_no_partial(self):
        graph = {"nodes": [{"id": "x", "type": "mainframe", "data": {"label": "X"}}], "edges": []}
        lines = self._interrupted(json.dumps(graph))
        self.assertEqual([e["type"] for e in lines], ["content", "error"])

    def test_rate_limit(self):
        statuses = [
            self.client.post("/api/generate", json={"prompt": "hi"}).status_code for _ in range(25)
        ]
        self.assertIn(429, statuses)

    def test_health_reports_circuits_and_credentials(self):
        for _ in range(3):
            self.breaker.record_failure("openrouter")
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["primary"], "zhipu")
        self.assertEqual(body["providers"]["zhipu"]["circuit"], "closed")
        self.assertTrue(body["providers"]["zhipu"]["has_credential"])
        self.assertFalse(body["providers"]["kimi"]["has_credential"])
        self.assertEqual(body["providers"]["openrouter"]["circuit"], "open")
        self.assertGreater(body["providers"]["openrouter"]["retry_after"], 0)
        self.assertNotIn("zhipu-test-key", response.text)

    def test_reset_circuit(self):
        for _ in range(3):
            self.breaker.record_failure("zhipu")
        response = self.client.post("/api/admin/circuits/zhipu/reset")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(self.breaker.can_execute("zhipu"))

    def test_reset_unknown_circuit(self):
        response = self.client.post("/api/admin/circuits/nope/reset")
        self.assertEqual(response.status_code, 404)

    def test_malformed_body_is_a_bad_request(self):
        response = self.client.post("/api/generate", json={"prompt": "Build a blog", "mode": "galaxy"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid request body")


def test_limiter_follows_rate_limit_settings():
    disabled = get_limiter({"enabled": False, "storage_uri": "memory://", "generate_limit": "1/minute"})
    assert disabled.enabled is False
    assert get_limiter().enabled == CONFIG["rate_limit"]["enabled"]
