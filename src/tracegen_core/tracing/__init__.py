"""
Tracegen Tracing Module.

Usage:
    from tracegen_core.tracing import tracer

    # Configure once at startup
    tracer.configure(config=my_config)

    # Use decorator for automatic instrumentation
    @tracer.instrument("my_operation")
    def my_function():
        ...

    # Use context manager for manual spans
    with tracer.span("my_span", key="value"):
        ...
"""

from tracegen_core.tracing.client import (
    TracegenTracer,
    get_tracer,
    tracer,
)

__all__ = [
    'TracegenTracer',
    'get_tracer',
    'tracer',
]
