import os
import sys
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource

ATTRIBUTE_PREFIX = "simulark."


def setup_tracing(service_name=None):
    """
    Installs the global TracerProvider for the service.

    Exporters:
    1. ENABLE_CONSOLE_TRACING=true -> spans printed to stdout.
    2. ENABLE_FILE_TRACING=true -> spans appended to TRACE_FILE (default 'traces.json').
    3. Neither -> spans are created but not exported.
    """
    service_name = service_name or os.getenv("OTEL_SERVICE_NAME", "Simulark")
    provider = TracerProvider(resource=Resource(attributes={"service.name": service_name}))

    if os.getenv("ENABLE_CONSOLE_TRACING", "false").lower() == "true":
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    elif os.getenv("ENABLE_FILE_TRACING", "false").lower() == "true":
        trace_path = os.getenv("TRACE_FILE", "traces.json")
        try:
            trace_file = open(trace_path, "a")
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter(out=trace_file)))
        except OSError as e:
            print(f"Failed to setup file tracing at {trace_path}: {e}", file=sys.stderr)

    trace.set_tracer_provider(provider)
    return trace.get_tracer(service_name)


def tag_span(span, **attributes):
    """Sets `simulark.<name>` attributes on `span`, skipping None values."""
    for name, value in attributes.items():
        if value is not None:
            span.set_attribute(f"{ATTRIBUTE_PREFIX}{name}", value)
