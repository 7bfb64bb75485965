import pytest

from simulark.engine.enricher import enrich_node, enrich_nodes, get_tech_from_label, normalize_tech_name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("postgres", "postgres"),
        ("PostgreSQL", "postgres"),
        ("Next.js", "nextjs"),
        ("  Redis  ", "redis"),
        ("React Native App", "react-native"),
        ("React Dashboard", "react"),
        ("Go", "go"),
        ("AWS Lambda", "lambda"),
        ("Kubernetes Cluster", "kubernetes"),
        ("GitHub Workflow", "github-actions"),
    ],
)
def test_normalize_tech_name(name, expected):
    assert normalize_tech_name(name) == expected


@pytest.mark.parametrize("name", [None, "", "   ", "Quantum Flux Capacitor"])
def test_normalize_unknown(name):
    assert normalize_tech_name(name) is None


@pytest.mark.parametrize("name", ["Service", "Web", "API", "Frontend", "Worker"])
def test_generic_component_labels_stay_unresolved(name):
    assert normalize_tech_name(name) is None
    node = {"id": "n", "type": "service", "data": {"label": name}}
    assert enrich_node(node) == node


def test_short_ids_need_word_boundaries():
    assert normalize_tech_name("Cargo Bay") != "go"


def test_get_tech_from_label():
    item = get_tech_from_label("Mongo")
    assert item["id"] == "mongodb"
    assert item["label"] == "MongoDB"
    assert get_tech_from_label("Quantum Flux Capacitor") is None


def test_enrich_node_stamps_catalog_fields():
    node = {"id": "db-1", "type": "database", "data": {"label": "Primary DB", "tech": "PostgreSQL"}}
    enriched = enrich_node(node)
    assert enriched["data"]["tech"] == "postgres"
    assert enriched["data"]["techLabel"] == "PostgreSQL"
    assert enriched["data"]["logo"] == "logos:postgresql"
    assert enriched["data"]["label"] == "Primary DB"
    assert node["data"]["tech"] == "PostgreSQL"


def test_enrich_node_falls_back_to_label():
    enriched = enrich_node({"id": "q", "type": "queue", "data": {"label": "Kafka"}})
    assert enriched["data"]["tech"] == "kafka"


def test_unmatched_node_is_unchanged():
    node = {"id": "x", "type": "service", "data": {"label": "Quantum Flux Capacitor"}}
    assert enrich_node(node) == node
    assert enrich_node({"id": "y", "type": "service"}) == {"id": "y", "type": "service"}


def test_enrich_nodes_preserves_ids_and_count():
    nodes = [
        {"id": "a", "type": "frontend", "data": {"label": "Next.js"}},
        {"id": "b", "type": "service", "data": {"label": "Quantum Flux Capacitor"}},
        {"id": "c", "type": "cache", "data": {"label": "Redis"}},
    ]
    enriched = enrich_nodes(nodes)
    assert [n["id"] for n in enriched] == ["a", "b", "c"]
