import logging

from dotenv import load_dotenv

load_dotenv()

from simulark.config.base.providers import PROVIDER_SETTINGS
from simulark.config.base.models import MODEL_CATALOG, MODEL_ALIASES
from simulark.config.base.settings import (
    ROUTING_SETTINGS,
    CIRCUIT_BREAKER_SETTINGS,
    RETRY_SETTINGS,
    GENERATION_SETTINGS,
    RATE_LIMIT_SETTINGS,
)

logger = logging.getLogger("Simulark")

"""Default configuration for the application.

Assembles the static tables from `simulark.config.base` into one dict that
the provider registry, the orchestrator and the HTTP server are built from.
"""

CONFIG = {
    "providers": PROVIDER_SETTINGS,
    "models": MODEL_CATALOG,
    "model_aliases": MODEL_ALIASES,
    "routing": ROUTING_SETTINGS,
    "circuit_breaker": CIRCUIT_BREAKER_SETTINGS,
    "retry": RETRY_SETTINGS,
    "generation": GENERATION_SETTINGS,
    "rate_limit": RATE_LIMIT_SETTINGS,
}
