import os

"""Common configuration settings."""

ROUTING_SETTINGS = {
    # Attempted first when the caller does not pick a model
    "primary_provider": os.getenv("SIMULARK_PRIMARY_PROVIDER", "zhipu"),
    # Attempted once if the primary fails for any reason
    "fallback_provider": os.getenv("SIMULARK_FALLBACK_PROVIDER", "openrouter"),
}

CIRCUIT_BREAKER_SETTINGS = {
    "failure_threshold": 3,
    "reset_timeout": 30.0,  # seconds
    "half_open_max_calls": 2,
}

RETRY_SETTINGS = {
    # Generic policy used by with_retry() when none is given
    "default": {
        "max_retries": 3,
        "base_delay": 1.0,
        "max_delay": 10.0,
        "exponential_base": 2.0,
    },
    # Policy applied around every provider call
    "provider_call": {
        "max_retries": 3,
        "base_delay": 1.0,
        "max_delay": 8.0,
        "exponential_base": 2.0,
    },
}

GENERATION_SETTINGS = {
    "temperature": 0.7,
}

RATE_LIMIT_SETTINGS = {
    "enabled": os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true",
    "generate_limit": os.getenv("GENERATE_RATE_LIMIT", "20/minute"),
    "storage_uri": os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
}
