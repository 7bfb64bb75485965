import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from simulark.common.models import MAX_NODES, Architecture, ArchitectureMetadata, Edge, Node

logger = logging.getLogger("Simulark")

_NODES_ADAPTER = TypeAdapter(List[Node])
_EDGES_ADAPTER = TypeAdapter(List[Edge])


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
    architecture: Optional[Architecture] = None


class ParseResult(BaseModel):
    """Outcome of turning model output into a graph. Failures are values, not exceptions."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def _format_validation_error(exc: ValidationError, prefix: str = "") -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        if prefix:
            location = f"{prefix}.{location}" if location else prefix
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def validate_structure(obj: Any) -> ValidationResult:
    """Loose structural check of a parsed response.

    Every problem is collected so one response reports all of them.
    """
    if not isinstance(obj, dict):
        return ValidationResult(valid=False, errors=["Response is not an object"])

    errors = []

    nodes = obj.get("nodes")
    if not isinstance(nodes, list):
        errors.append("Missing or invalid 'nodes' array")
    else:
        for index, node in enumerate(nodes):
            if not isinstance(node, dict):
                errors.append(f"Node {index} is not an object")
                continue
            if not isinstance(node.get("id"), str):
                errors.append(f"Node {index} missing 'id'")
            if not isinstance(node.get("type"), str):
                errors.append(f"Node {index} missing 'type'")
            if not isinstance(node.get("data"), dict):
                errors.append(f"Node {index} missing 'data'")

    edges = obj.get("edges")
    if not isinstance(edges, list):
        errors.append("Missing or invalid 'edges' array")
    else:
        for index, edge in enumerate(edges):
            if not isinstance(edge, dict):
                errors.append(f"Edge {index} is not an object")
                continue
            for field in ("id", "source", "target"):
                if not isinstance(edge.get(field), str):
                    errors.append(f"Edge {index} missing '{field}'")

    return ValidationResult(valid=not errors, errors=errors)


def validate_against_schema(obj: Any) -> ValidationResult:
    """Strict check: closed enums, 1 to MAX_NODES nodes, edges referencing real nodes."""
    try:
        architecture = Architecture.model_validate(obj)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=_format_validation_error(e))
    return ValidationResult(valid=True, architecture=architecture)


def validate_partial_architecture(obj: Any) -> ValidationResult:
    """Validates only the top-level keys present, for incomplete streamed results.

    Edge references are not checked since their nodes may not have arrived yet.
    """
    if not isinstance(obj, dict):
        return ValidationResult(valid=False, errors=["Response is not an object"])

    errors = []
    if "nodes" in obj:
        try:
            nodes = _NODES_ADAPTER.validate_python(obj["nodes"])
            if len(nodes) > MAX_NODES:
                errors.append(f"nodes: at most {MAX_NODES} nodes are allowed")
        except ValidationError as e:
            errors.extend(_format_validation_error(e, "nodes"))
    if "edges" in obj:
        try:
            _EDGES_ADAPTER.validate_python(obj["edges"])
        except ValidationError as e:
            errors.extend(_format_validation_error(e, "edges"))
    if "metadata" in obj:
        try:
            ArchitectureMetadata.model_validate(obj["metadata"])
        except ValidationError as e:
            errors.extend(_format_validation_error(e, "metadata"))

    return ValidationResult(valid=not errors, errors=errors)


def extract_json_text(raw: str) -> str:
    """Strips markdown fences and bounds the text by its outermost braces."""
    text = raw.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        text = text[first : last + 1]
    return text.strip()


def parse_response(raw: str) -> ParseResult:
    try:
        data = json.loads(extract_json_text(raw))
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse model response: {e}")
        return ParseResult(success=False, error=f"Failed to parse response: {e}")

    validation = validate_structure(data)
    if not validation.valid:
        return ParseResult(
            success=False,
            error=f"Invalid response structure: {', '.join(validation.errors)}",
        )
    return ParseResult(success=True, data=data)
