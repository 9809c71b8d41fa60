import logging

from pydantic import SecretStr

from tracegen_core.models.config import TracegenConfig, TracegenTracingConfig


class TestConfig:
    def test_sensitive_field_hidden_when_dumping_config(self):
        config = TracegenTracingConfig(api_key='test')
        json_output = config.model_dump_json()
        dictionary_output = config.model_dump()

        assert '**********' == str(config.api_key)
        assert isinstance(config.api_key, SecretStr)
        assert '"api_key"' not in json_output
        assert 'api_key' not in dictionary_output

    def test_traces_endpoint_derived_from_endpoint(self):
        config = TracegenTracingConfig(endpoint='https://otel.example.com/')

        assert config.traces_endpoint == 'https://otel.example.com/v1/traces'

    def test_defaults(self, monkeypatch):
        for name in (
            'TRACEGEN_INPUT_FILENAME',
            'TRACEGEN_OUTPUT_FILENAME',
            'TRACEGEN_RUNTIME_TOGGLE',
            'TRACEGEN_INCLUDE_PROVIDER_LIFECYCLE',
            'TRACEGEN_TRACER_AS_INJECTABLE_CAPABILITY',
        ):
            monkeypatch.delenv(name, raising=False)

        config = TracegenConfig(_env_file=None)

        assert config.input_filename == 'api.connect.go'
        assert config.output_filename == 'api.telemetry.go'
        assert config.interface_suffix == 'Client'
        assert config.include_provider_lifecycle is False
        assert config.runtime_toggle is False
        assert config.tracer_as_injectable_capability is True
        assert config.logging_level == logging.INFO

    def test_values_read_from_environment(self, monkeypatch):
        monkeypatch.setenv('TRACEGEN_OUTPUT_FILENAME', 'otel.go')
        monkeypatch.setenv('TRACEGEN_RUNTIME_TOGGLE', 'true')

        config = TracegenConfig(_env_file=None)

        assert config.output_filename == 'otel.go'
        assert config.runtime_toggle is True
