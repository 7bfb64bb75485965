import json
import logging
import re
import traceback
from datetime import datetime, timezone

LOGGER_NAME = "Simulark"


class ApiKeyFilter(logging.Filter):
    KEY_PATTERN = re.compile(
        # key=VALUE in URL params
        r"(?P<prefix>key=)(?P<key1>[^&\s\"']+)"
        r"|"
        # Bearer tokens
        r"(?P<bearer_prefix>Bearer\s+|Authorization:\s*Bearer\s*)(?P<key2>[^\"'\s]+)"
        r"|"
        # Known formats (OpenAI/OpenRouter sk-, NVIDIA nvapi-, bare 32-char tokens)
        r"(?P<key3>"
        r"sk-[a-zA-Z0-9\-_]{20,}|"
        r"nvapi-[a-zA-Z0-9\-_]{20,}|"
        r"\b[a-zA-Z0-9]{32}\b"
        r")"
    )

    # Credentials registered at startup, masked by exact match
    KNOWN_KEYS = set()

    @classmethod
    def add_sensitive_keys(cls, keys):
        """Registers a list of keys to be explicitly masked."""
        if not keys:
            return
        cls.KNOWN_KEYS.update(str(k) for k in keys if k)

    def mask(self, s: str) -> str:
        def replacer(match):
            if match.group("prefix"):
                return f"{match.group('prefix')}***MASKED***"
            if match.group("bearer_prefix"):
                return f"{match.group('bearer_prefix')}***MASKED***"
            return "***MASKED***"

        s = self.KEY_PATTERN.sub(replacer, s)

        # Safety net for keys the regex does not recognise (e.g. Zhipu id.secret keys)
        for key in self.KNOWN_KEYS:
            if key in s:
                s = s.replace(key, "***MASKED***")
        return s

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.mask(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self.mask(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            else:
                record.args = tuple(
                    self.mask(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )
        return True


class JSONFormatter(logging.Formatter):
    """
    Formats log records as a JSON string.
    """

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }

        if record.exc_info:
            log_record["exception"] = "".join(
                traceback.format_exception(*record.exc_info)
            )

        return json.dumps(log_record, ensure_ascii=False)


def setup_json_logging(level: int = logging.INFO):
    """
    Sets up the root logger to use the JSONFormatter.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    handler.addFilter(ApiKeyFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # httpx logs full request URLs; filter them before they reach any handler
    for logger_name in ["httpx", "httpcore"]:
        lib_logger = logging.getLogger(logger_name)
        lib_logger.filters.clear()
        lib_logger.addFilter(ApiKeyFilter())
        lib_logger.setLevel(logging.WARNING)
        lib_logger.propagate = True

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.filters.clear()
    app_logger.addFilter(ApiKeyFilter())

    logging.info("JSON logging configured.")
