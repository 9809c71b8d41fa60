import logging
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TracegenTracingConfig(BaseSettings):
    """Export of tracegen own spans to an OpenTelemetry collector.

    Read from the `TRACEGEN_TRACING_` environment variables.
    """

    enable: bool = False
    """Export spans of the generator runs. Default False."""

    endpoint: str = 'http://localhost:4318/'
    """Base url of the OTLP/HTTP collector."""

    traces_endpoint: str = Field(
        default_factory=lambda data: f'{data["endpoint"].rstrip("/")}/v1/traces'
    )
    """Url receiving the spans. Default `<endpoint>/v1/traces`."""

    api_key: Optional[SecretStr] = Field(exclude=True, default=None)
    """Sent in `authentication_header` when set. Never dumped."""

    authentication_header: str = 'Authorization'

    timeout_seconds: int = 10

    verbose: bool = False
    """Log each batch of exported spans. Default False."""

    model_config = SettingsConfigDict(
        env_prefix='tracegen_tracing_',
        env_file='.env',
        extra='ignore',
    )


class TracegenConfig(BaseSettings):
    """Settings of the generator, read from the `TRACEGEN_` environment variables.

    Command line options take precedence over these values.
    """

    input_filename: str = 'api.connect.go'
    """Files looked up while walking directories."""

    output_filename: str = 'api.telemetry.go'
    """Name of the file generated next to each input file."""

    interface_suffix: str = 'Client'
    """Interfaces whose exported name ends with this suffix are instrumented."""

    include_provider_lifecycle: bool = False
    """Emit helpers creating and shutting down a tracer provider per service."""

    runtime_toggle: bool = False
    """Emit `SetInstrumentationEnabled` to switch telemetry at runtime."""

    tracer_as_injectable_capability: bool = True
    """Instrumented clients receive their tracer in the constructor. When False
    package level tracers are used."""

    logging_level: Optional[int] = logging.INFO

    logging_file: Optional[str] = None
    """Also write logs to this file."""

    theme: Optional[Literal['light', 'dark']] = None
    """Console palette, detected from the terminal when None."""

    tracing: TracegenTracingConfig = TracegenTracingConfig()

    model_config = SettingsConfigDict(
        env_prefix='tracegen_',
        env_file='.env',
        extra='ignore',
        nested_model_default_partial_update=True,
    )
