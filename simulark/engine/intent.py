import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from simulark.common.models import ComplexityLevel, OperationType
from simulark.config.base.architectures import (
    ARCHITECTURE_PATTERNS,
    COMPLEXITY_INDICATORS,
    COMPONENT_COUNT_ADJUSTMENTS,
    FOLLOW_UP_QUESTIONS,
    OPERATION_INSTRUCTIONS,
    OPERATION_KEYWORDS,
)

logger = logging.getLogger("Simulark")

MIN_PROMPT_LENGTH = 5
GREETINGS = ("hi", "hello", "hey", "help")
_GIBBERISH = re.compile(r"^(.)\1{4,}$")
_SHORT_WORDS_ONLY = re.compile(r"^(\w{1,2}\s+){3,}$")

TOO_SHORT_SUGGESTIONS = [
    "Build a scalable e-commerce platform with microservices",
    "Create a real-time chat application with WebSockets",
    "Design an AI-powered recommendation system",
    "Build a serverless data processing pipeline",
]
GIBBERISH_SUGGESTIONS = [
    "Build a REST API with Node.js and PostgreSQL",
    "Create a full-stack application with React and FastAPI",
    "Design a cloud-native microservices architecture",
    "Build a data pipeline with Kafka and ClickHouse",
]
GREETING_SUGGESTIONS = [
    "Build a SaaS application with multi-tenant architecture",
    "Create an event-driven system with message queues",
    "Design a video streaming platform with CDN",
]


class ArchitectureDetection(BaseModel):
    type: str
    confidence: float = Field(ge=0, le=1)
    matched_keywords: List[str] = Field(default_factory=list)
    suggested_questions: List[str] = Field(default_factory=list)


class PromptValidation(BaseModel):
    is_valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None
    suggested_prompts: List[str] = Field(default_factory=list)


def detect_architecture_type(text: str) -> ArchitectureDetection:
    """Scores `text` against every archetype's keyword list.

    Multi-word phrases score 2, single words 1. Confidence is
    min(best_score / 3, 1). A tie between two or more archetypes at a score of
    at least 2 yields "mixed"; no hit at all yields "unknown".
    """
    normalized = text.lower()
    scores: Dict[str, int] = {}
    matched: Dict[str, List[str]] = {}

    for archetype, keywords in ARCHITECTURE_PATTERNS.items():
        scores[archetype] = 0
        matched[archetype] = []
        for keyword in keywords:
            if keyword.lower() in normalized:
                scores[archetype] += 2 if " " in keyword else 1
                matched[archetype].append(keyword)

    best_score = max(scores.values(), default=0)
    if best_score == 0:
        return ArchitectureDetection(
            type="unknown",
            confidence=0.0,
            suggested_questions=FOLLOW_UP_QUESTIONS["unknown"],
        )

    leaders = [a for a, score in scores.items() if score == best_score]
    confidence = min(best_score / 3, 1.0)

    if len(leaders) > 1 and best_score >= 2:
        keywords = []
        for archetype in leaders:
            keywords.extend(k for k in matched[archetype] if k not in keywords)
        return ArchitectureDetection(
            type="mixed",
            confidence=confidence,
            matched_keywords=keywords,
            suggested_questions=FOLLOW_UP_QUESTIONS["mixed"],
        )

    winner = leaders[0]
    return ArchitectureDetection(
        type=winner,
        confidence=confidence,
        matched_keywords=matched[winner],
        suggested_questions=FOLLOW_UP_QUESTIONS.get(winner, []),
    )


def detect_complexity(text: str) -> ComplexityLevel:
    normalized = text.lower()

    for tier in ("complex", "simple", "medium"):
        if any(indicator in normalized for indicator in COMPLEXITY_INDICATORS[tier]):
            return tier

    if len(normalized) < 20:
        return "simple"
    return "medium"


def detect_operation(text: str, existing_nodes: Optional[Sequence] = None) -> OperationType:
    """Classifies an edit request; always "create" when there is no graph yet."""
    if not existing_nodes:
        return "create"

    normalized = text.lower()
    for operation, keywords in OPERATION_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            logger.info(f"Detected operation: {operation}")
            return operation

    logger.info("Detected operation: modify (default)")
    return "modify"


def get_operation_instructions(operation: OperationType) -> str:
    return OPERATION_INSTRUCTIONS.get(operation, OPERATION_INSTRUCTIONS["modify"])


def should_relax_constraints(operation: OperationType) -> bool:
    """Simplify and remove may go below the mode's minimum component count."""
    return operation in ("simplify", "remove")


def get_component_count_adjustment(operation: OperationType) -> Tuple[int, int]:
    return COMPONENT_COUNT_ADJUSTMENTS.get(operation, (0, 0))


def validate_prompt(text: str) -> PromptValidation:
    trimmed = text.strip()

    if len(trimmed) < MIN_PROMPT_LENGTH:
        return PromptValidation(
            is_valid=False,
            error=(
                f"Prompt is too short. Please provide at least {MIN_PROMPT_LENGTH} "
                "characters describing your architecture."
            ),
            suggested_prompts=TOO_SHORT_SUGGESTIONS,
        )

    lowered = trimmed.lower()
    if _GIBBERISH.match(lowered) or _SHORT_WORDS_ONLY.match(lowered):
        return PromptValidation(
            is_valid=False,
            error=(
                "That doesn't look like a valid architecture description. "
                "Please describe what you want to build."
            ),
            suggested_prompts=GIBBERISH_SUGGESTIONS,
        )

    words = lowered.split()
    if lowered.startswith(GREETINGS) and len(words) < 3:
        return PromptValidation(
            is_valid=True,
            warning=(
                "It looks like you're just saying hello! To generate an architecture, "
                "please describe what you want to build."
            ),
            suggested_prompts=GREETING_SUGGESTIONS,
        )

    return PromptValidation(is_valid=True)
