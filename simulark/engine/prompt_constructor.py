from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from simulark.common.models import (
    ArchitectureMode,
    ComplexityLevel,
    ConversationTurn,
    OperationType,
    UserPreferences,
)
from simulark.config.base.architectures import ARCHITECTURE_GUIDELINES, COMPLEXITY_GUIDELINES
from simulark.config.base.modes import (
    CORRECT_APPROACHES,
    FRAMEWORK_GROUPS,
    INCOMPATIBLE_PAIRS,
    MODE_CONSTRAINTS,
    MODE_GUIDELINES,
    TECH_RECOMMENDATIONS,
    TECHNOLOGY_IDS,
)
from simulark.engine.intent import (
    ArchitectureDetection,
    detect_architecture_type,
    detect_complexity,
    detect_operation,
    get_component_count_adjustment,
    get_operation_instructions,
    should_relax_constraints,
)

# Canvas-only shapes that carry no architectural meaning
ANNOTATION_NODE_TYPES = ("stickyNote", "text", "group", "frame")
HISTORY_TURNS = 10
HISTORY_TRUNCATE = 150

JSON_SHAPE = """{
  "nodes": [
    {
      "id": "unique-id",
      "type": "frontend|backend|database|gateway|cache|queue|ai|storage",
      "position": { "x": number, "y": number },
      "data": {
        "label": "Display Name",
        "description": "Brief purpose",
        "tech": "technology-id-from-ecosystem",
        "serviceType": "same-as-type"
      }
    }
  ],
  "edges": [
    {
      "id": "edge-unique-id",
      "source": "source-node-id",
      "target": "target-node-id",
      "animated": true,
      "data": { "protocol": "https" }
    }
  ]
}"""


class PromptContext(BaseModel):
    """Everything the prompt builder needs for one generation request."""

    user_input: str
    detection: ArchitectureDetection
    complexity: ComplexityLevel = "medium"
    operation: OperationType = "create"
    mode: ArchitectureMode = "default"
    current_nodes: List[Dict[str, Any]] = Field(default_factory=list)
    current_edges: List[Dict[str, Any]] = Field(default_factory=list)
    user_preferences: Optional[UserPreferences] = None
    conversation_history: List[ConversationTurn] = Field(default_factory=list)
    quick_mode: bool = False


def build_prompt_context(
    user_input: str,
    mode: ArchitectureMode = "default",
    current_nodes: Optional[List[Dict[str, Any]]] = None,
    current_edges: Optional[List[Dict[str, Any]]] = None,
    user_preferences: Optional[UserPreferences] = None,
    conversation_history: Optional[List[ConversationTurn]] = None,
    quick_mode: bool = False,
) -> PromptContext:
    """Runs the detectors over `user_input` and packages the result."""
    current_nodes = current_nodes or []
    return PromptContext(
        user_input=user_input,
        detection=detect_architecture_type(user_input),
        complexity=detect_complexity(user_input),
        operation=detect_operation(user_input, current_nodes),
        mode=mode,
        current_nodes=current_nodes,
        current_edges=current_edges or [],
        user_preferences=user_preferences,
        conversation_history=conversation_history or [],
        quick_mode=quick_mode,
    )


def _component_bounds(context: PromptContext):
    constraints = MODE_CONSTRAINTS[context.mode]
    min_adj, max_adj = get_component_count_adjustment(context.operation)
    adjusted_min = max(1, constraints["min_components"] + min_adj)
    adjusted_max = max(adjusted_min, constraints["max_components"] + max_adj)
    return adjusted_min, adjusted_max


def _node_line(node: Dict[str, Any]) -> str:
    data = node.get("data") or {}
    label = data.get("label") or node.get("id")
    description = data.get("description") or "No description"
    return f"- {label} ({node.get('type')}): {description}"


def _annotation_line(node: Dict[str, Any]) -> str:
    data = node.get("data") or {}
    if node.get("type") == "text":
        return f'- Text: "{data.get("label") or ""}"'
    return f"- Shape: {data.get('label') or node.get('id')} ({node.get('type')})"


def _existing_architecture_section(context: PromptContext) -> str:
    if not context.current_nodes:
        return ""

    components = [n for n in context.current_nodes if n.get("type") not in ANNOTATION_NODE_TYPES]
    annotations = [n for n in context.current_nodes if n.get("type") in ANNOTATION_NODE_TYPES]

    lines = [
        "CURRENT STATE:",
        f"You are MODIFYING an existing architecture with {len(context.current_nodes)} components "
        f"and {len(context.current_edges)} connections.",
        "",
        f"Existing Architecture Components ({len(components)}):",
    ]
    lines.extend(_node_line(n) for n in components)

    if annotations:
        lines.append("")
        lines.append(f"Custom Annotations & Shapes ({len(annotations)}):")
        lines.extend(_annotation_line(n) for n in annotations)
        lines.append("")
        lines.append(
            "NOTE: Preserve these custom annotations when modifying the architecture. "
            "They represent user-added notes and visual elements."
        )

    lines.append("")
    lines.append(f"IMPORTANT: {get_operation_instructions(context.operation)}")
    lines.append("")
    lines.append("PRESERVATION RULES:")
    lines.append("1. Keep existing node IDs where possible")
    lines.append("2. Only modify components explicitly mentioned in the request")
    lines.append("3. Maintain connections unless they involve removed components")
    lines.append("4. Preserve the overall architecture pattern unless changing it entirely")
    lines.append("5. Always preserve custom shapes and text annotations")
    return "\n".join(lines)


def _conversation_section(context: PromptContext) -> str:
    previous = [
        turn.content[:HISTORY_TRUNCATE]
        for turn in context.conversation_history[-HISTORY_TURNS:]
        if turn.role == "user"
    ]
    if not previous:
        return ""

    lines = ["CONVERSATION CONTEXT:", "This is a continuing conversation. Previous requests:"]
    lines.extend(f'{i}. "{request}"' for i, request in enumerate(previous, start=1))
    lines.append("")
    lines.append(f'Current request: "{context.user_input}"')
    lines.append("")
    lines.append(
        "INSTRUCTION: Build upon or modify the previous architecture based on this conversation flow. "
        "If the user is changing direction, acknowledge the pivot and adapt the architecture accordingly."
    )
    return "\n".join(lines)


def _mode_section(context: PromptContext) -> str:
    constraints = MODE_CONSTRAINTS[context.mode]

    def flag(value: bool) -> str:
        return "required" if value else "optional"

    lines = [
        f"MODE: {context.mode.upper()}",
        constraints["description"],
        f"Focus: {constraints['focus']}",
        "",
        "CONSTRAINTS:",
        f"- Minimum components: {constraints['min_components']}",
        f"- Maximum components: {constraints['max_components']}",
        f"- CDN: {flag(constraints['require_cdn'])}",
        f"- Load balancer: {flag(constraints['require_load_balancer'])}",
        f"- Observability: {flag(constraints['require_observability'])}",
    ]
    lines.extend(f"- {rule}" for rule in MODE_GUIDELINES[context.mode])
    return "\n".join(lines)


def _framework_rules_section() -> str:
    lines = [
        "FRAMEWORK COMPATIBILITY RULES (CRITICAL):",
        "",
        "INCOMPATIBLE COMBINATIONS - NEVER USE THESE TOGETHER:",
    ]
    for index, (left, right) in enumerate(INCOMPATIBLE_PAIRS, start=1):
        lines.append(
            f"{index}. Never combine {left} frameworks ({', '.join(FRAMEWORK_GROUPS[left])}) "
            f"with {right} frameworks ({', '.join(FRAMEWORK_GROUPS[right])})"
        )
    lines.append("")
    lines.append("CORRECT APPROACHES:")
    lines.extend(f"{i}. {approach}" for i, approach in enumerate(CORRECT_APPROACHES, start=1))
    return "\n".join(lines)


def _condensed_framework_rules_section() -> str:
    lines = ["FRAMEWORK RULES:"]
    lines.extend(
        f"- Never combine {left} frameworks with {right} frameworks" for left, right in INCOMPATIBLE_PAIRS
    )
    return "\n".join(lines)


def _preferences_section(preferences: Optional[UserPreferences]) -> str:
    if preferences is None:
        return ""

    stack = []
    clouds = [c.upper() for c in preferences.cloud_providers if c != "Generic"]
    if clouds:
        stack.append(f"- Cloud Providers: {', '.join(clouds)}")
    elif not preferences.cloud_providers and preferences.cloud_provider and preferences.cloud_provider != "Generic":
        stack.append(f"- Cloud Provider: {preferences.cloud_provider.upper()}")

    if preferences.languages:
        stack.append(f"- Programming Languages: {', '.join(lang.upper() for lang in preferences.languages)}")
    elif preferences.language:
        stack.append(f"- Programming Language: {preferences.language.upper()}")

    if preferences.frameworks:
        stack.append(f"- Core Frameworks: {', '.join(f.upper() for f in preferences.frameworks)}")
    elif preferences.framework:
        stack.append(f"- Core Framework: {preferences.framework.upper()}")

    blocks = []
    if stack:
        blocks.append(
            "USER PREFERRED STACK (MANDATORY):\n"
            + "\n".join(stack)
            + "\n\nPrioritize these technologies. If conflicting options are present, "
            "choose the best fit for the detected pattern."
        )
    if preferences.architecture_types:
        blocks.append(
            "PREFERRED ARCHITECTURE PATTERNS:\n"
            f"{', '.join(preferences.architecture_types)}\n\n"
            "Incorporate these architectural styles where applicable."
        )
    if preferences.application_type:
        blocks.append(
            "TARGET APPLICATION TYPE:\n"
            f"{', '.join(preferences.application_type)}\n\n"
            "Optimize the architecture for this specific type of application."
        )
    if preferences.custom_instructions:
        blocks.append(
            "CUSTOM USER INSTRUCTIONS:\n"
            f'"{preferences.custom_instructions}"\n\n'
            "Follow these specific instructions strictly."
        )
    return "\n\n".join(blocks)


def _tech_recommendations_section(context: PromptContext) -> str:
    archetype = context.detection.type
    recommendations = TECH_RECOMMENDATIONS[context.mode].get(
        archetype, TECH_RECOMMENDATIONS[context.mode]["unknown"]
    )
    header = {
        "startup": "RECOMMENDED TECHNOLOGIES (Startup):",
        "enterprise": "RECOMMENDED TECHNOLOGIES (Enterprise):",
    }.get(context.mode, "RECOMMENDED TECHNOLOGIES:")
    section = header + "\n" + "\n".join(f"- {line}" for line in recommendations)

    preferences = _preferences_section(context.user_preferences)
    if preferences:
        section += "\n\n" + preferences
    return section


def _ecosystem_section() -> str:
    lines = ["TECHNOLOGY ECOSYSTEM:", "Use these exact technology IDs when possible:"]
    lines.extend(f"- {group}: {ids}" for group, ids in TECHNOLOGY_IDS.items())
    lines.append("")
    lines.append(
        'IMPORTANT: Always include the "tech" field with the specific technology ID '
        '(e.g., "tech": "nextjs" or "tech": "postgresql"). This enables proper icon rendering.'
    )
    return "\n".join(lines)


POSITIONING_SECTION = """POSITIONING GUIDELINES:
- Layer 1 (Entry): y: 50-150 (CDN, Load Balancer, API Gateway, Frontend)
- Layer 2 (Application): y: 200-350 (Services, Auth, Workers, AI)
- Layer 3 (Data): y: 400-500 (Databases, Cache, Storage, Queues)
- Spread horizontally: x spacing 200-300px"""

CONNECTION_SECTION = """CONNECTION REQUIREMENTS - VERY IMPORTANT:
1. EVERY node (except the entry point) MUST have at least ONE incoming edge
2. Create edges showing data flow: Load Balancer -> Frontend -> Backend -> Database
3. Use "animated": true on all edges to show active connections
4. Protocol options: "https", "http", "websocket", "grpc", "database", "cache", "queue"
5. Example edge: { "id": "edge-1", "source": "gateway-1", "target": "frontend-1", "animated": true, "data": { "protocol": "https" } }"""


def _critical_rules_section(context: PromptContext) -> str:
    adjusted_min, adjusted_max = _component_bounds(context)
    relaxed = f" (relaxed for {context.operation})" if should_relax_constraints(context.operation) else ""
    last_rule = (
        "Preserve existing node IDs when possible - only modify what was requested"
        if context.current_nodes
        else "Generate all new components with unique IDs"
    )
    return "\n".join(
        [
            "CRITICAL RULES:",
            f"1. Never exceed {adjusted_max} components",
            f"2. Never use less than {adjusted_min} components{relaxed}",
            "3. Never mix full-stack frameworks with separate backend frameworks",
            "4. Match complexity to request (simple apps don't need CDN/load balancer)",
            "5. Prefer managed services in startup mode",
            "6. Include monitoring only if complexity warrants it",
            f"7. {last_rule}",
        ]
    )


def _output_section() -> str:
    return (
        "OUTPUT FORMAT - CRITICAL:\n"
        "You MUST return a complete JSON object with BOTH nodes AND edges arrays. "
        "Output the JSON in the content field, not in your reasoning.\n\n"
        f"REQUIRED JSON STRUCTURE:\n{JSON_SHAPE}"
    )


def build_system_prompt(context: PromptContext) -> str:
    """Builds the system prompt for one generation request.

    Pure and deterministic: the same context always yields the same text.
    Quick mode keeps the archetype with its confidence and guidelines, a
    condensed form of the framework rules, the existing graph, the component
    bounds and the JSON shape. Everything else is dropped.
    """
    archetype = context.detection.type
    role = f"You are an expert Solutions Architect specializing in {archetype.replace('-', ' ', 1)} design."
    request = f'USER REQUEST: "{context.user_input}"'
    existing = _existing_architecture_section(context)
    guidelines = ARCHITECTURE_GUIDELINES.get(archetype, ARCHITECTURE_GUIDELINES["unknown"])
    confidence = f"CONFIDENCE: {round(context.detection.confidence * 100)}%"
    closing = "Generate the complete JSON architecture now."

    if context.quick_mode:
        parts = [
            role,
            request,
            existing,
            f"DETECTED ARCHITECTURE: {archetype}\n{confidence}",
            guidelines,
            _condensed_framework_rules_section(),
            _critical_rules_section(context),
            _output_section(),
            closing,
        ]
        return "\n\n".join(p for p in parts if p)

    detection_lines = "\n".join(
        [
            f"OPERATION TYPE: {context.operation.upper()}",
            f"DETECTED ARCHITECTURE: {archetype}",
            confidence,
        ]
    )
    component_guidelines = "\n".join(
        [
            "COMPONENT GUIDELINES:",
            _mode_section(context),
            COMPLEXITY_GUIDELINES[context.complexity],
            "",
            _framework_rules_section(),
        ]
    )

    parts = [
        role,
        request,
        existing,
        _conversation_section(context),
        detection_lines,
        component_guidelines,
        guidelines,
        _tech_recommendations_section(context),
        _ecosystem_section(),
        POSITIONING_SECTION,
        _critical_rules_section(context),
        _output_section(),
        CONNECTION_SECTION,
        closing,
    ]
    return "\n\n".join(p for p in parts if p)
