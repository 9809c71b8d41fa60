from logging import Logger
from typing import List

from jinja2 import Environment, PackageLoader, StrictUndefined

from tracegen_core.logging import create_null_logger
from tracegen_core.models import (
    GeneratedArtifact,
    ImportEntry,
    ServiceTarget,
    SynthesisOptions,
)
from tracegen_core.tracing import tracer

SERIALIZATION_ERROR = 'ERROR: FAILED TO SERIALIZE'
"""Span attribute value used when a message cannot be serialized to JSON"""

_GO_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\a': '\\a',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\v': '\\v',
}


def go_string(value: str) -> str:
    """Quote a value as a Go interpreted string literal."""
    escaped = []
    for char in str(value):
        if char in _GO_ESCAPES:
            escaped.append(_GO_ESCAPES[char])
        elif char.isprintable():
            escaped.append(char)
        elif ord(char) > 0xFFFF:
            escaped.append(f'\\U{ord(char):08x}')
        else:
            escaped.append(f'\\u{ord(char):04x}')
    return '"' + ''.join(escaped) + '"'


def pad(value: str, width: int) -> str:
    return str(value).ljust(width)


def create_environment() -> Environment:
    """Jinja environment loading the Go templates shipped with the package."""
    environment = Environment(
        loader=PackageLoader('tracegen_core.synthesis', 'templates'),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    environment.filters['go_string'] = go_string
    environment.filters['pad'] = pad
    return environment


def _unique(entries: List[ImportEntry], seen: List[ImportEntry]) -> List[ImportEntry]:
    specs = {(entry.alias, entry.path) for entry in seen}
    unique = []
    for entry in entries:
        if (entry.alias, entry.path) not in specs:
            specs.add((entry.alias, entry.path))
            unique.append(entry)
    return unique


class TemplateSynthesizer:
    """Generates the Go source of the instrumented clients.

    The output only depends on the package name, the targets and the
    options: services are emitted in the order of the targets and methods in
    the order of each target, so that generating twice from the same input
    gives the same bytes.

    Example
    -------
    >>> synthesizer = TemplateSynthesizer(SynthesisOptions(runtime_toggle=True))
    >>> artifact = synthesizer.synthesize('orderv1connect', targets)
    >>> print(artifact.text)
    """

    template_name = 'telemetry.go.j2'

    def __init__(
        self,
        options: SynthesisOptions = None,
        logger: Logger = None,
        environment: Environment = None,
    ):
        self._options = options or SynthesisOptions()

        if logger is None:
            logger = create_null_logger(name='tracegen.synthesizer')

        self._logger = logger
        self._environment = environment or create_environment()

    @property
    def options(self) -> SynthesisOptions:
        return self._options

    @tracer.instrument('synthesize')
    def synthesize(self, package: str, targets: List[ServiceTarget]) -> GeneratedArtifact:
        """Render the generated source unit.

        Parameters
        ----------
        package : str
            The Go package of the generated file, the same of the client interfaces
        targets : List[ServiceTarget]
            The client interfaces to instrument

        Returns
        -------
        GeneratedArtifact
            The generated source, ending with a newline
        """
        # Go rejects unused imports, targets without methods reference none
        used = [target for target in targets if target.methods]

        service_imports = _unique(
            [
                ImportEntry(alias=target.import_alias, path=target.import_path)
                for target in used
                if target.import_path is not None
            ],
            seen=[],
        )
        envelope_imports = _unique(
            [entry for target in used for entry in target.envelope_imports],
            seen=service_imports,
        )

        text = self._environment.get_template(self.template_name).render(
            package=package,
            targets=targets,
            options=self._options,
            service_imports=service_imports,
            envelope_imports=envelope_imports,
            serialization_error=SERIALIZATION_ERROR,
        )

        self._logger.debug(
            f'Generated {len(targets)} instrumented clients for package {package}'
        )

        return GeneratedArtifact(
            package=package,
            text=text,
            targets=[target.client_interface_name for target in targets],
        )
