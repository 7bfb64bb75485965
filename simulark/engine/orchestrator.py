import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from opentelemetry import trace

from simulark.common.models import ArchitectureMode, ConversationTurn, UserPreferences
from simulark.common.tracing import tag_span
from simulark.config.base.settings import GENERATION_SETTINGS
from simulark.engine.enricher import enrich_nodes
from simulark.engine.parser import ParseResult, parse_response, validate_against_schema
from simulark.engine.prompt_constructor import build_prompt_context, build_system_prompt
from simulark.providers.circuit_breaker import CircuitBreaker
from simulark.providers.openai_compat import ModelStream, open_chat_stream
from simulark.providers.registry import ProviderRegistry
from simulark.providers.resilience import ResilientCaller, RetryPolicy

logger = logging.getLogger("Simulark")
tracer = trace.get_tracer(__name__)


def process_response(raw: str) -> ParseResult:
    """Parses, strictly validates and enriches a complete model response."""
    parsed = parse_response(raw)
    if not parsed.success:
        return parsed

    validation = validate_against_schema(parsed.data)
    if not validation.valid:
        return ParseResult(
            success=False,
            error=f"Schema validation failed: {'; '.join(validation.errors)}",
        )

    graph = validation.architecture.to_wire()
    graph["nodes"] = enrich_nodes(graph["nodes"])
    return ParseResult(success=True, data=graph)


class GenerationOrchestrator:
    """Top-level entry point for architecture generation.

    Picks the provider chain, builds the prompt and opens the model stream
    through the resilient caller. Owns the circuit breaker store shared by all
    requests of this process.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        http_client: Optional[httpx.AsyncClient] = None,
        breaker: Optional[CircuitBreaker] = None,
        resilience: Optional[ResilientCaller] = None,
        temperature: Optional[float] = GENERATION_SETTINGS["temperature"],
    ):
        self.registry = registry
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient()
        self.breaker = breaker or CircuitBreaker()
        self.resilience = resilience or ResilientCaller(self.breaker)
        self.temperature = temperature

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        http_client: Optional[httpx.AsyncClient] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "GenerationOrchestrator":
        """Wires registry, breaker and provider retry policy from the CONFIG dict."""
        breaker = CircuitBreaker(**config["circuit_breaker"])
        return cls(
            ProviderRegistry.from_config(config, env=env),
            http_client=http_client,
            breaker=breaker,
            resilience=ResilientCaller(breaker, RetryPolicy(**config["retry"]["provider_call"])),
            temperature=config["generation"]["temperature"],
        )

    def _provider_chain(self, model_id: Optional[str]) -> List[Tuple[str, Optional[str]]]:
        """Returns (provider id, model override) pairs to attempt in order."""
        if model_id:
            info = self.registry.resolve_model(model_id)
            if info is not None:
                return [(info.provider, info.model)]
            logger.warning(f"Unknown model '{model_id}'; using the default provider chain")

        chain = [(self.registry.primary, None)]
        if self.registry.fallback != self.registry.primary:
            chain.append((self.registry.fallback, None))
        return chain

    async def _attempt(
        self, provider_id: str, model: Optional[str], messages: List[Dict[str, str]]
    ) -> ModelStream:
        descriptor = self.registry.get(provider_id)
        if not descriptor.has_credential:
            logger.warning(f"[{provider_id}] No API key configured; attempting the call anyway")

        async def open_stream():
            return await open_chat_stream(
                self.http_client,
                descriptor,
                messages,
                model=model,
                temperature=self.temperature,
            )

        with tracer.start_as_current_span("provider_attempt") as span:
            tag_span(span, provider=provider_id, model=model or descriptor.model)
            try:
                stream = await self.resilience.call_with_resilience(
                    provider_id, open_stream, "Architecture generation"
                )
            except Exception as e:
                tag_span(span, outcome="failure")
                span.record_exception(e)
                raise
            tag_span(span, outcome="success")
            return stream

    async def generate(
        self,
        prompt: str,
        model_id: Optional[str] = None,
        mode: ArchitectureMode = "default",
        current_nodes: Optional[List[Dict[str, Any]]] = None,
        current_edges: Optional[List[Dict[str, Any]]] = None,
        quick_mode: bool = False,
        conversation_history: Optional[List[ConversationTurn]] = None,
        user_preferences: Optional[UserPreferences] = None,
    ) -> ModelStream:
        """Opens a model stream for `prompt`.

        An explicit, known model is attempted alone. Otherwise the primary
        provider is tried and, on any failure, the fallback once. The error of
        the last attempted provider propagates unchanged.

        Returns:
            A ModelStream that has already produced its first chunk. Errors
            after that point surface as StreamInterruptedError while iterating.
        """
        context = build_prompt_context(
            prompt,
            mode=mode,
            current_nodes=current_nodes,
            current_edges=current_edges,
            user_preferences=user_preferences,
            conversation_history=conversation_history,
            quick_mode=quick_mode,
        )
        messages = [
            {"role": "system", "content": build_system_prompt(context)},
            {"role": "user", "content": prompt},
        ]

        with tracer.start_as_current_span("generate") as span:
            tag_span(
                span,
                mode=mode,
                architecture_type=context.detection.type,
                operation=context.operation,
                quick_mode=quick_mode,
            )

            chain = self._provider_chain(model_id)
            logger.info(
                f"Starting generation. Chain: {[p for p, _ in chain]}. Mode: {mode}. "
                f"Prompt length: {len(prompt)}"
            )

            for index, (provider_id, model) in enumerate(chain):
                try:
                    stream = await self._attempt(provider_id, model, messages)
                except Exception as e:
                    if index + 1 < len(chain):
                        logger.warning(
                            f"{provider_id} failed: {e}. Switching to {chain[index + 1][0]}"
                        )
                        continue
                    logger.error(f"{provider_id} failed, no providers left: {e}")
                    tag_span(span, outcome="failure")
                    raise
                logger.info(f"{provider_id} stream established")
                tag_span(span, provider=provider_id, outcome="success")
                return stream

    async def generate_architecture(self, prompt: str, **kwargs) -> ParseResult:
        """Generates, drains the stream and returns the validated, enriched graph."""
        stream = await self.generate(prompt, **kwargs)
        content = []
        try:
            async for chunk in stream:
                if chunk.type == "content":
                    content.append(chunk.text)
        finally:
            await stream.aclose()
        return process_response("".join(content))

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
