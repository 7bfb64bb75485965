import json as json_lib
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse

from simulark.api.middleware.rate_limit import limiter
from simulark.common.errors import StreamInterruptedError
from simulark.common.models import GenerateRequest
from simulark.config.default_config import CONFIG
from simulark.engine.enricher import enrich_nodes
from simulark.engine.intent import validate_prompt
from simulark.engine.orchestrator import GenerationOrchestrator, process_response
from simulark.engine.parser import parse_response, validate_partial_architecture

logger = logging.getLogger("Simulark")

router = APIRouter()


def _event(payload) -> str:
    return json_lib.dumps(payload, ensure_ascii=False) + "\n"


def _partial_result(raw: str):
    """Salvages what an interrupted stream delivered, or None if it does not hold up."""
    parsed = parse_response(raw)
    if not parsed.success:
        return None
    validation = validate_partial_architecture(parsed.data)
    if not validation.valid:
        logger.info(f"Discarding partial output: {'; '.join(validation.errors)}")
        return None
    return {**parsed.data, "nodes": enrich_nodes(parsed.data["nodes"])}


async def _generation_events(orchestrator: GenerationOrchestrator, req: GenerateRequest):
    """Yields NDJSON lines: token chunks, then one result or error line.

    An interrupted stream whose output already forms a usable graph also gets a
    partial line, ahead of its error line.
    """
    try:
        stream = await orchestrator.generate(
            req.prompt,
            model_id=req.model,
            mode=req.mode,
            current_nodes=req.current_nodes,
            current_edges=req.current_edges,
            quick_mode=req.quick_mode,
            conversation_history=req.conversation_history,
            user_preferences=req.user_preferences,
        )
    except Exception as e:
        yield _event({"type": "error", "error": f"Generation failed: {e}"})
        return

    content = []
    try:
        async for chunk in stream:
            if chunk.type == "content":
                content.append(chunk.text)
            yield _event({"type": chunk.type, "data": chunk.text})
    except StreamInterruptedError as e:
        partial = _partial_result("".join(content))
        if partial is not None:
            yield _event({"type": "partial", "data": partial})
        yield _event({"type": "error", "error": f"Generation failed: {e}"})
        return
    finally:
        await stream.aclose()

    result = process_response("".join(content))
    if not result.success:
        logger.warning(f"Model output rejected: {result.error}")
        yield _event({"type": "error", "error": f"Generation failed: {result.error}"})
        return
    logger.info(f"Generation complete. Nodes: {len(result.data['nodes'])}")
    yield _event({"type": "result", "data": result.data})


@router.post("/api/generate", summary="Generate an architecture graph from a prompt")
@limiter.limit(CONFIG["rate_limit"]["generate_limit"])
async def handle_generate(req: GenerateRequest, request: Request):
    """Streams newline-delimited JSON events for one generation request."""
    validation = validate_prompt(req.prompt)
    if not validation.is_valid:
        logger.info(f"Rejected prompt: {validation.error}")
        return JSONResponse(
            status_code=400,
            content={
                "error": validation.error,
                "suggestedPrompts": validation.suggested_prompts,
            },
        )
    if validation.warning:
        logger.info(f"Prompt warning: {validation.warning}")

    orchestrator = request.app.state.orchestrator
    return StreamingResponse(
        _generation_events(orchestrator, req), media_type="application/x-ndjson"
    )
