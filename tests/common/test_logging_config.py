import json
import logging

from simulark.common.logging_config import ApiKeyFilter, JSONFormatter


def make_record(msg, args=None, exc_info=None):
    return logging.LogRecord("Simulark", logging.INFO, __file__, 1, msg, args, exc_info)


def test_masks_bearer_tokens():
    record = make_record("Authorization: Bearer abc.def-123")
    ApiKeyFilter().filter(record)
    assert "abc.def-123" not in record.msg
    assert "***MASKED***" in record.msg


def test_masks_url_key_params():
    record = make_record("GET https://api.test/v1?key=AIzaSecret123&alt=sse")
    ApiKeyFilter().filter(record)
    assert "AIzaSecret123" not in record.msg
    assert "&alt=sse" in record.msg


def test_masks_known_key_shapes():
    record = make_record("using sk-or-v1-0123456789abcdefghijklmnop for nvapi-0123456789abcdefghijkl")
    ApiKeyFilter().filter(record)
    assert "sk-or-v1" not in record.msg
    assert "nvapi-0123" not in record.msg


def test_masks_registered_keys_in_args():
    ApiKeyFilter.add_sensitive_keys(["4f1c.zhipu-secret", None, ""])
    record = make_record("key is %s", ("4f1c.zhipu-secret",))
    ApiKeyFilter().filter(record)
    assert record.getMessage() == "key is ***MASKED***"


def test_leaves_plain_messages_alone():
    record = make_record("[CircuitBreaker] zhipu opened after 3 failures")
    ApiKeyFilter().filter(record)
    assert record.msg == "[CircuitBreaker] zhipu opened after 3 failures"


def test_json_formatter():
    record = make_record("hello %s", ("world",))
    line = json.loads(JSONFormatter().format(record))
    assert line["message"] == "hello world"
    assert line["level"] == "INFO"
    assert line["name"] == "Simulark"
    assert line["timestamp"].endswith("Z")
    assert "exception" not in line
