"""Test suite for the generate command."""

import os
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tracegen_cli.commands.generate import app
from tracegen_core.exceptions import ShapeMismatchException
from tracegen_core.models import GeneratedArtifact

FOO_SOURCE = """package foov1connect

type FooClient interface {
	Bar(req *v1.BarRequest) (*connect.Response[v1.BarResponse], error)
}
"""


@pytest.fixture
def runner():
    """Fixture providing a CLI runner."""
    return CliRunner()


@pytest.fixture
def source():
    """Fixture providing a connect-go generated file."""
    current_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    path = os.path.join(current_dir, 'fixtures', 'shopv1connect', 'api.connect.go')
    with open(path, 'rb') as f:
        return f.read()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        'TRACEGEN_INCLUDE_PROVIDER_LIFECYCLE',
        'TRACEGEN_RUNTIME_TOGGLE',
        'TRACEGEN_TRACER_AS_INJECTABLE_CAPABILITY',
    ):
        monkeypatch.delenv(name, raising=False)


def test_generate_reads_stdin_and_writes_stdout(runner, source):
    result = runner.invoke(app, [], input=source)

    assert result.exit_code == 0
    assert result.stdout.startswith('// Code generated by tracegen. DO NOT EDIT.')
    assert 'type InstrumentedOrderServiceClient struct' in result.stdout
    assert 'type InstrumentedInventoryServiceClient struct' in result.stdout


def test_generate_with_global_tracer_and_toggle(runner, source):
    result = runner.invoke(app, ['--global-tracer', '--toggle'], input=source)

    assert result.exit_code == 0
    assert 'otel.Tracer("shop.v1.OrderService")' in result.stdout
    assert 'func SetInstrumentationEnabled(enabled bool) {' in result.stdout


def test_generate_with_lifecycle(runner, source):
    result = runner.invoke(app, ['--lifecycle'], input=source)

    assert result.exit_code == 0
    assert 'func NewTraceProviders(' in result.stdout


def test_generate_fails_on_unsupported_method(runner):
    result = runner.invoke(app, [], input=FOO_SOURCE)

    assert result.exit_code == 1
    assert 'Code generated by tracegen' not in result.stdout


def test_generate_fails_on_invalid_go(runner):
    result = runner.invoke(app, [], input='package foo\n\ntype X interface {\n')

    assert result.exit_code == 1


def test_generate_fails_on_invalid_utf8(runner):
    with patch('tracegen_cli.commands.generate.console') as mock_console:
        result = runner.invoke(app, [], input=b'package foo\n\nconst Name = "caf\xe9"\n')

    assert result.exit_code == 1
    assert 'Code generated by tracegen' not in result.stdout
    mock_console.error.assert_called_once_with(
        'Cannot parse STDIN:3: invalid UTF-8 encoding'
    )


def test_generate_writes_sibling_files(runner, source, tmp_path):
    nested = tmp_path / 'gen' / 'shop' / 'shopv1connect'
    nested.mkdir(parents=True)
    (nested / 'api.connect.go').write_bytes(source)

    result = runner.invoke(app, [str(tmp_path)])

    assert result.exit_code == 0
    assert (nested / 'api.telemetry.go').exists()
    assert 'Code generated by tracegen' not in result.stdout


def test_generate_failure_writes_no_artifact(runner, tmp_path):
    (tmp_path / 'api.connect.go').write_text(FOO_SOURCE)

    result = runner.invoke(app, [str(tmp_path)])

    assert result.exit_code != 0
    assert not (tmp_path / 'api.telemetry.go').exists()


def test_generate_walks_every_directory(runner, tmp_path):
    first = tmp_path / 'first'
    second = tmp_path / 'second'
    first.mkdir()
    second.mkdir()

    with patch('tracegen_cli.commands.generate.Tracegen') as mock_tracegen:
        mock_tracegen.generate_tree.return_value = []

        result = runner.invoke(app, [str(first), str(second)])

        assert result.exit_code == 0
        assert mock_tracegen.generate_tree.call_count == 2
        mock_tracegen.generate_tree.assert_any_call(first)
        mock_tracegen.generate_tree.assert_any_call(second)


def test_generate_passes_options_to_configuration(runner):
    with patch('tracegen_cli.commands.generate.Tracegen') as mock_tracegen:
        mock_tracegen.generate.return_value = GeneratedArtifact(
            package='foo', text='package foo\n'
        )

        result = runner.invoke(
            app, ['--global-tracer', '--no-toggle', '--lifecycle'], input='package foo\n'
        )

        assert result.exit_code == 0
        assert result.stdout == 'package foo\n'

        config = mock_tracegen.configure.call_args[0][0]
        assert config.tracer_as_injectable_capability is False
        assert config.runtime_toggle is False
        assert config.include_provider_lifecycle is True


def test_generate_reports_generation_errors(runner, tmp_path):
    with patch('tracegen_cli.commands.generate.Tracegen') as mock_tracegen:
        mock_tracegen.generate_tree.side_effect = ShapeMismatchException(
            'expected 2 parameters, found 1', interface='FooClient', method='Bar'
        )

        result = runner.invoke(app, [str(tmp_path)])

        assert result.exit_code == 1
        mock_tracegen.generate_tree.assert_called_once()
