"""
Self-tracing of tracegen runs.

Spans cover indexing, extraction and synthesis of every source unit, so a
slow or failing generation can be inspected next to the services it
instruments. Nothing is exported unless `tracing.enable` is configured.

Usage:
    from tracegen_core.tracing import tracer

    @tracer.instrument('extract')
    def extract_targets(unit):
        ...

    with tracer.span('generate_tree', directory='proto') as span:
        span.set_attribute('artifacts', 3)

    tracer.count('artifacts.generated')
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Iterator, ParamSpec, TypeVar

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.metrics import Counter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.trace import Span, StatusCode

from tracegen_core.models.config import TracegenConfig, TracegenTracingConfig

P = ParamSpec('P')
R = TypeVar('R')

INSTRUMENTATION_NAME = 'tracegen'


class LoggingSpanExporter(SpanExporter):
    """Logs each batch of spans before handing it to the wrapped exporter."""

    def __init__(self, exporter: SpanExporter, endpoint: str, logger: logging.Logger):
        self._exporter = exporter
        self._endpoint = endpoint
        self._logger = logger

    def export(self, spans) -> SpanExportResult:
        if spans:
            self._logger.debug(f'Exporting {len(spans)} spans to {self._endpoint}')
        return self._exporter.export(spans)

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


def create_exporter(
    settings: TracegenTracingConfig, logger: logging.Logger
) -> SpanExporter:
    """Build the OTLP/HTTP exporter described by the tracing settings."""
    headers = {}
    if settings.api_key is not None:
        headers[settings.authentication_header] = settings.api_key.get_secret_value()

    exporter = OTLPSpanExporter(
        endpoint=settings.traces_endpoint,
        headers=headers,
        timeout=settings.timeout_seconds,
    )

    if settings.verbose:
        return LoggingSpanExporter(exporter, settings.traces_endpoint, logger)
    return exporter


def _attribute(value: Any) -> str | int | float | bool:
    return value if isinstance(value, (str, int, float, bool)) else str(value)


class TracegenTracer:
    """Facade over the OpenTelemetry API used by tracegen.

    Until `configure` installs a provider, spans and counters go to the
    OpenTelemetry no-op implementations.
    """

    def __init__(self):
        self._logger = logging.getLogger(INSTRUMENTATION_NAME)
        self._provider: TracerProvider | None = None
        self._configured = False
        self._counters: dict[str, Counter] = {}

    @property
    def is_configured(self) -> bool:
        return self._configured

    @property
    def is_enabled(self) -> bool:
        return self._provider is not None

    def configure(
        self,
        config: TracegenConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> TracegenTracer:
        """Install the span exporter when tracing is enabled.

        Only the first call has an effect, the global OpenTelemetry provider
        can be set once per process.
        """
        if self._configured:
            return self

        if logger is not None:
            self._logger = logger

        settings = (config or TracegenConfig()).tracing

        if settings.enable:
            self._provider = TracerProvider()
            self._provider.add_span_processor(
                BatchSpanProcessor(create_exporter(settings, self._logger))
            )
            trace.set_tracer_provider(self._provider)
            self._logger.debug(f'Tracing enabled, exporting to {settings.traces_endpoint}')

        self._configured = True
        return self

    def shutdown(self) -> None:
        """Flush the pending spans. Does nothing when tracing is disabled."""
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None

    @contextmanager
    def span(self, name: str, **attributes: Any) -> Iterator[Span]:
        """Open a span, marking it as failed when the block raises."""
        otel_tracer = trace.get_tracer(INSTRUMENTATION_NAME)

        with otel_tracer.start_as_current_span(
            name,
            attributes={key: _attribute(value) for key, value in attributes.items()},
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            try:
                yield span
            except Exception as ex:
                span.record_exception(ex)
                span.set_status(StatusCode.ERROR, str(ex))
                raise

    def instrument(
        self, name: str | None = None
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """Decorate a function so that every call runs in its own span.

        The span is named `name`, or after the function when omitted.
        """

        def decorator(func: Callable[P, R]) -> Callable[P, R]:
            @wraps(func)
            def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                with self.span(name or func.__name__, function=func.__qualname__):
                    return func(*args, **kwargs)

            return wrapper

        return decorator

    def count(self, name: str, value: int = 1, **labels: str) -> None:
        """Add `value` to the `tracegen.<name>` counter."""
        counter_name = f'{INSTRUMENTATION_NAME}.{name}'

        counter = self._counters.get(counter_name)
        if counter is None:
            counter = metrics.get_meter(INSTRUMENTATION_NAME).create_counter(counter_name)
            self._counters[counter_name] = counter

        counter.add(value, labels)


_tracer_instance: TracegenTracer | None = None


def get_tracer() -> TracegenTracer:
    """Get the process wide TracegenTracer."""
    global _tracer_instance
    if _tracer_instance is None:
        _tracer_instance = TracegenTracer()
    return _tracer_instance


tracer = get_tracer()
