"""Explicit model catalog.

Maps canonical model ids (``provider:model``) to the provider that serves
them. Every provider named here must exist in PROVIDER_SETTINGS; the
registry checks this at startup.
"""

MODEL_CATALOG = {
    "qwen:qwen3-max": {
        "name": "QWEN3 MAX",
        "provider": "qwen",
        "model": "qwen3-max",
        "description": "Flagship Qwen model",
    },
    "qwen:qwen3.5-plus": {
        "name": "QWEN3.5 PLUS",
        "provider": "qwen",
        "model": "qwen3.5-plus",
        "description": "Balanced Qwen model",
    },
    "qwen:qwen-flash": {
        "name": "QWEN FLASH",
        "provider": "qwen",
        "model": "qwen-flash",
        "description": "Low latency Qwen model",
    },
    "nvidia:z-ai/glm5": {
        "name": "GLM-5",
        "provider": "nvidia",
        "model": "z-ai/glm5",
        "description": "State-of-the-art 744B MoE model",
    },
    "zhipu:glm-4.7-flash": {
        "name": "GLM-4.7 FLASH",
        "provider": "zhipu",
        "model": "glm-4.7-flash",
        "description": "Fast and efficient default",
    },
    "nvidia:minimaxai/minimax-m2.1": {
        "name": "MINIMAX M2.1",
        "provider": "nvidia",
        "model": "minimaxai/minimax-m2.1",
        "description": "Next-gen MoE for speed and reasoning",
    },
    "nvidia:moonshotai/kimi-k2.5": {
        "name": "KIMI K2.5",
        "provider": "nvidia",
        "model": "moonshotai/kimi-k2.5",
        "description": "Multi-modal model with 15T tokens",
    },
    "kimi:kimi-k2.5": {
        "name": "KIMI K2.5 (Moonshot)",
        "provider": "kimi",
        "model": "kimi-k2.5",
        "description": "Kimi served by Moonshot directly",
    },
    "openrouter:arcee-ai/trinity-large-preview:free": {
        "name": "TRINITY LARGE",
        "provider": "openrouter",
        "model": "arcee-ai/trinity-large-preview:free",
        "description": "Free-tier fallback",
    },
}

# Bare ids sent by older clients
MODEL_ALIASES = {
    "glm-4.7-flash": "zhipu:glm-4.7-flash",
    "arcee-ai": "openrouter:arcee-ai/trinity-large-preview:free",
    "arcee-ai/trinity-large-preview:free": "openrouter:arcee-ai/trinity-large-preview:free",
    "z-ai/glm5": "nvidia:z-ai/glm5",
    "kimi-k2.5": "kimi:kimi-k2.5",
    "qwen3-max": "qwen:qwen3-max",
    "qwen3.5-plus": "qwen:qwen3.5-plus",
    "qwen-flash": "qwen:qwen-flash",
}
