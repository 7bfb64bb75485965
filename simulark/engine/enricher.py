import re
from typing import Any, Dict, List, Optional

from simulark.config.base.tech_catalog import TECH_ALIASES, TECH_ECOSYSTEM

_BY_ID = {item["id"]: item for item in TECH_ECOSYSTEM}
_BY_LABEL = {item["label"].lower(): item["id"] for item in TECH_ECOSYSTEM}

# (term, id) pairs searched inside free text, longest first so "react native"
# wins over "react"
_SEARCH_TERMS = sorted(
    {(item["id"], item["id"]) for item in TECH_ECOSYSTEM}
    | {(item["label"].lower(), item["id"]) for item in TECH_ECOSYSTEM}
    | set(TECH_ALIASES.items()),
    key=lambda pair: (-len(pair[0]), pair[0]),
)

MIN_FREE_MATCH_LENGTH = 3

# Label words long enough to identify a technology on their own, in catalog order
_LABEL_WORDS = [
    (word, item["id"])
    for item in TECH_ECOSYSTEM
    for word in item["label"].lower().split()
    if len(word) > MIN_FREE_MATCH_LENGTH
]


def _contains_term(text: str, term: str) -> bool:
    if len(term) < MIN_FREE_MATCH_LENGTH:
        # "go", "s3", "r2" only count as whole words
        return re.search(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", text) is not None
    return term in text


def normalize_tech_name(name: Optional[str]) -> Optional[str]:
    """Maps free-text technology names to a catalog id.

    Tries exact id, alias, exact label, a catalog term inside the name, then a
    single distinctive label word inside the name. The name is never matched
    inside a catalog term, so generic labels like "API" stay unresolved.
    Returns None when nothing matches.
    """
    if not name:
        return None
    normalized = name.lower().strip()
    if not normalized:
        return None

    if normalized in _BY_ID:
        return normalized
    if normalized in TECH_ALIASES:
        return TECH_ALIASES[normalized]
    if normalized in _BY_LABEL:
        return _BY_LABEL[normalized]

    for term, tech_id in _SEARCH_TERMS:
        if _contains_term(normalized, term):
            return tech_id

    for word, tech_id in _LABEL_WORDS:
        if word in normalized:
            return tech_id

    return None


def get_tech_from_label(name: Optional[str]) -> Optional[Dict[str, str]]:
    tech_id = normalize_tech_name(name)
    return _BY_ID.get(tech_id) if tech_id else None


def enrich_node(node: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `node` with tech, techLabel and logo stamped on a match.

    Nodes without data, or whose tech/label matches nothing, come back unchanged.
    """
    data = node.get("data")
    if not isinstance(data, dict):
        return node

    source = data.get("tech") or data.get("label") or ""
    item = get_tech_from_label(source if isinstance(source, str) else "")
    if item is None:
        return node

    return {
        **node,
        "data": {
            **data,
            "tech": item["id"],
            "techLabel": item["label"],
            "logo": item["icon"],
        },
    }


def enrich_nodes(nodes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [enrich_node(n) for n in nodes]
