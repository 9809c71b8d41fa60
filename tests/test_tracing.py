import pytest
from opentelemetry.trace import Span

from tracegen_core.tracing import tracer
from tracegen_core.tracing.client import TracegenTracer, get_tracer


class TestTracegenTracer:
    def test_global_tracer_is_shared(self):
        assert get_tracer() is tracer

    def test_disabled_by_default(self):
        client = TracegenTracer()
        client.configure()

        assert client.is_configured
        assert not client.is_enabled

    def test_instrument_returns_the_result(self):
        client = TracegenTracer()

        @client.instrument('double')
        def double(value):
            return value * 2

        assert double(21) == 42
        assert double.__name__ == 'double'

    def test_instrument_raises_errors_unchanged(self):
        client = TracegenTracer()

        @client.instrument()
        def failing():
            raise ValueError('boom')

        with pytest.raises(ValueError, match='boom'):
            failing()

    def test_span_without_configuration(self):
        client = TracegenTracer()

        with client.span('walk', directory='proto', depth=3) as span:
            assert isinstance(span, Span)

    def test_count_without_configuration(self):
        client = TracegenTracer()

        client.count('artifacts.generated')
        client.count('artifacts.generated', 2)

        assert list(client._counters) == ['tracegen.artifacts.generated']

    def test_shutdown_without_provider(self):
        TracegenTracer().shutdown()
