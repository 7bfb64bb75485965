"""Connection settings for the OpenAI-compatible model providers.

Credentials are never stored here; `api_key_env` names the environment
variable read once at startup.
"""

import os

APP_HEADERS = {
    "HTTP-Referer": "https://simulark.app",
    "X-Title": "Simulark",
}

PROVIDER_SETTINGS = {
    "zhipu": {
        "base_url": "https://open.bigmodel.cn/api/paas/v4",
        "api_key_env": "ZHIPU_API_KEY",
        "model": "glm-4.7-flash",
        # Thinking stays on; the system prompt keeps the JSON in the content field
        "request_params": {"thinking": {"type": "enabled"}},
        "headers": APP_HEADERS,
        "timeout": 30.0,
    },
    "openrouter": {
        "base_url": "https://openrouter.ai/api/v1",
        "api_key_env": "OPENROUTER_API_KEY",
        "model": "arcee-ai/trinity-large-preview:free",
        "request_params": {"reasoning": {"enabled": True}},
        "headers": APP_HEADERS,
        "timeout": 30.0,
    },
    "kimi": {
        "base_url": os.getenv("KIMI_BASE_URL", "https://api.moonshot.ai/v1"),
        "api_key_env": "KIMI_API_KEY",
        "model": "kimi-k2.5",
        "request_params": {},
        "headers": {},
        "timeout": 30.0,
    },
    "nvidia": {
        "base_url": "https://integrate.api.nvidia.com/v1",
        "api_key_env": "NVIDIA_API_KEY",
        "model": "z-ai/glm5",
        "request_params": {},
        "headers": {},
        "timeout": 30.0,
    },
    "qwen": {
        "base_url": os.getenv(
            "QWEN_BASE_URL", "https://dashscope-intl.aliyuncs.com/compatible-mode/v1"
        ),
        "api_key_env": "QWEN_API_KEY",
        "model": "qwen-flash",
        "request_params": {},
        "headers": {},
        "timeout": 30.0,
    },
}
