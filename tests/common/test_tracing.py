from unittest.mock import MagicMock

from simulark.common.tracing import tag_span


def test_tag_span_prefixes_and_skips_none():
    span = MagicMock()
    tag_span(span, provider="zhipu", model=None, quick_mode=False)
    span.set_attribute.assert_any_call("simulark.provider", "zhipu")
    span.set_attribute.assert_any_call("simulark.quick_mode", False)
    assert span.set_attribute.call_count == 2
