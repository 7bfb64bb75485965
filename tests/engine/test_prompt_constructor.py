from simulark.common.models import ConversationTurn, UserPreferences
from simulark.engine.intent import detect_architecture_type, get_operation_instructions
from simulark.engine.prompt_constructor import build_prompt_context, build_system_prompt

NODES = [
    {"id": "web-1", "type": "frontend", "data": {"label": "Web App", "description": "Next.js site"}},
    {"id": "api-1", "type": "backend", "data": {"label": "API"}},
    {"id": "db-1", "type": "database", "data": {"label": "Postgres"}},
    {"id": "note-1", "type": "stickyNote", "data": {"label": "Ask about GDPR"}},
]
EDGES = [{"id": "e1", "source": "web-1", "target": "api-1"}]


def _prompt(text, **kwargs):
    return build_system_prompt(build_prompt_context(text, **kwargs))


def test_prompt_is_deterministic():
    kwargs = dict(mode="enterprise", current_nodes=NODES, current_edges=EDGES)
    assert _prompt("optimize the api layer", **kwargs) == _prompt("optimize the api layer", **kwargs)


def test_full_prompt_sections():
    prompt = _prompt("Build a serverless image resizer")
    assert 'USER REQUEST: "Build a serverless image resizer"' in prompt
    assert "DETECTED ARCHITECTURE: serverless" in prompt
    assert "OPERATION TYPE: CREATE" in prompt
    confidence = round(detect_architecture_type("Build a serverless image resizer").confidence * 100)
    assert f"CONFIDENCE: {confidence}%" in prompt
    assert "MODE: DEFAULT" in prompt
    assert "FRAMEWORK COMPATIBILITY RULES" in prompt
    assert "Never combine fullstack frameworks" in prompt
    assert "TECHNOLOGY ECOSYSTEM:" in prompt
    assert "POSITIONING GUIDELINES:" in prompt
    assert "CONNECTION REQUIREMENTS" in prompt
    assert "Never exceed 10 components" in prompt
    assert "Never use less than 4 components" in prompt
    assert "CURRENT STATE:" not in prompt


def test_quick_mode_is_strictly_shorter():
    full = _prompt("Build a serverless image resizer", current_nodes=NODES, current_edges=EDGES)
    quick = _prompt(
        "Build a serverless image resizer", current_nodes=NODES, current_edges=EDGES, quick_mode=True
    )
    assert len(quick) < len(full)
    assert "DETECTED ARCHITECTURE: serverless" in quick
    assert "CONFIDENCE: " in quick
    assert "Never combine fullstack frameworks with backend frameworks" in quick
    assert "Never combine traditional frameworks with fullstack frameworks" in quick
    assert "FRAMEWORK COMPATIBILITY RULES" not in quick
    assert "Existing Architecture Components" in quick
    assert "REQUIRED JSON STRUCTURE" in quick
    assert "TECHNOLOGY ECOSYSTEM:" not in quick


def test_simplify_relaxes_bounds():
    prompt = _prompt("simplify this", mode="startup", current_nodes=NODES, current_edges=EDGES)
    assert "OPERATION TYPE: SIMPLIFY" in prompt
    assert "Never exceed 2 components" in prompt
    assert "Never use less than 1 components (relaxed for simplify)" in prompt


def test_extend_raises_upper_bound():
    prompt = _prompt("add a redis cache", mode="enterprise", current_nodes=NODES)
    assert "Never exceed 22 components" in prompt
    assert "Never use less than 6 components" in prompt


def test_existing_graph_and_annotations():
    prompt = _prompt("rename it", current_nodes=NODES, current_edges=EDGES)
    assert f"IMPORTANT: {get_operation_instructions('modify')}" in prompt
    assert "4 components and 1 connections" in prompt
    assert "Existing Architecture Components (3):" in prompt
    assert "- Web App (frontend): Next.js site" in prompt
    assert "- API (backend): No description" in prompt
    assert "Custom Annotations & Shapes (1):" in prompt
    assert "Preserve existing node IDs" in prompt


def test_conversation_history_keeps_recent_user_turns():
    history = [ConversationTurn(role="user", content=f"request {i}") for i in range(12)]
    history.append(ConversationTurn(role="assistant", content="assistant reply"))
    history.append(ConversationTurn(role="user", content="x" * 400))
    prompt = _prompt("make it cheaper", conversation_history=history)

    assert "CONVERSATION CONTEXT:" in prompt
    assert "request 11" in prompt
    assert "request 3" not in prompt
    assert "assistant reply" not in prompt
    assert "x" * 150 in prompt
    assert "x" * 151 not in prompt


def test_user_preferences():
    prefs = UserPreferences(
        cloudProviders=["aws", "Generic"],
        languages=["python"],
        customInstructions="Use only managed services",
    )
    prompt = _prompt("Build a blog platform", user_preferences=prefs)
    assert "USER PREFERRED STACK (MANDATORY):" in prompt
    assert "- Cloud Providers: AWS" in prompt
    assert "GENERIC" not in prompt
    assert "- Programming Languages: PYTHON" in prompt
    assert '"Use only managed services"' in prompt


def test_legacy_preference_fields():
    prefs = UserPreferences(cloudProvider="gcp", framework="django")
    prompt = _prompt("Build a blog platform", user_preferences=prefs)
    assert "- Cloud Provider: GCP" in prompt
    assert "- Core Framework: DJANGO" in prompt
