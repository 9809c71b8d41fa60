"""Facade for accessing tracegen code generation functionality."""

from logging import Logger
from pathlib import Path
from typing import Iterator, List, Optional

from tracegen_core.extraction import extract_targets
from tracegen_core.indexer import GoSourceIndexer
from tracegen_core.logging import create_isolated_logger
from tracegen_core.models import GeneratedArtifact, SynthesisOptions
from tracegen_core.models.config import TracegenConfig
from tracegen_core.synthesis import TemplateSynthesizer
from tracegen_core.tracing import tracer


class Tracegen:
    """Static facade generating instrumented connect-go clients.

    Example
    -------
    Generate the instrumentation of a single file:
    >>> artifact = Tracegen.generate(Path('api.connect.go').read_bytes())
    >>> print(artifact.text)

    Generate a sibling file next to every `api.connect.go` of a tree:
    >>> written = Tracegen.generate_tree('proto/gen')
    """

    _config: Optional[TracegenConfig] = None

    _logger: Optional[Logger] = None

    _indexer: Optional[GoSourceIndexer] = None

    def __new__(cls):
        """Prevent instantiation of this static class."""
        raise TypeError(f'{cls.__name__} is a static class and cannot be instantiated')

    @classmethod
    def configure(
        cls, config: Optional[TracegenConfig] = None, logger: Optional[Logger] = None
    ) -> TracegenConfig:
        """Set the configuration and logger used by the following generations.

        Parameters
        ----------
        config : TracegenConfig, optional
            The configuration. If None, it is loaded from the environment
        logger : Logger, optional
            The logger. If None, an isolated `tracegen` logger is created

        Returns
        -------
        TracegenConfig
            The configuration in use
        """
        cls._config = config or TracegenConfig()

        if logger is None:
            logger = create_isolated_logger(
                name='tracegen',
                level=cls._config.logging_level,
                file_path=cls._config.logging_file,
            )

        cls._logger = logger
        cls._indexer = GoSourceIndexer(logger=logger)

        tracer.configure(config=cls._config, logger=logger)

        return cls._config

    @classmethod
    def config(cls) -> TracegenConfig:
        """Get the tracegen configuration, loading it on first use."""
        if cls._config is None:
            cls.configure()
        return cls._config

    @classmethod
    def options(cls) -> SynthesisOptions:
        """Get the synthesis options defined by the configuration."""
        config = cls.config()
        return SynthesisOptions(
            include_provider_lifecycle=config.include_provider_lifecycle,
            runtime_toggle=config.runtime_toggle,
            tracer_as_injectable_capability=config.tracer_as_injectable_capability,
        )

    @classmethod
    def generate(
        cls,
        source: bytes | str,
        filename: str = 'STDIN',
        options: Optional[SynthesisOptions] = None,
    ) -> GeneratedArtifact:
        """Generate the instrumented clients of a connect-go source file.

        Parameters
        ----------
        source : bytes | str
            The content of the connect-go generated file
        filename : str, optional
            Name used in error messages, by default `STDIN`
        options : SynthesisOptions, optional
            The variant to generate. If None, uses the configured options

        Returns
        -------
        GeneratedArtifact
            The generated Go source

        Throws
        -------
        ParsingException
            If the source is not valid Go
        ShapeMismatchException
            If a client interface has a method that is not a unary RPC
        NoTargetException
            If the source declares no client interface
        """
        config = cls.config()

        unit = cls._indexer.index(source, filename=filename)

        targets = extract_targets(
            unit, suffix=config.interface_suffix, logger=cls._logger
        )

        artifact = TemplateSynthesizer(
            options or cls.options(), logger=cls._logger
        ).synthesize(unit.package, targets)

        tracer.count('artifacts.generated')

        return artifact

    @classmethod
    def generate_tree(
        cls,
        directory: str | Path,
        options: Optional[SynthesisOptions] = None,
    ) -> List[Path]:
        """Generate a sibling file next to each connect-go file found in a directory tree.

        Directories and files that cannot be read, and outputs that cannot be
        written, are logged and skipped. Parsing and shape errors abort the
        whole walk, files generated before the error are left in place.

        Parameters
        ----------
        directory : str | Path
            The root of the walk
        options : SynthesisOptions, optional
            The variant to generate. If None, uses the configured options

        Returns
        -------
        List[Path]
            The written files, in walk order
        """
        config = cls.config()
        written = []

        with tracer.span('generate_tree', directory=str(directory)) as span:
            for source_path in cls._find_sources(Path(directory), config.input_filename):
                cls._logger.debug(f'Generating instrumentation for [{source_path}]')

                try:
                    source = source_path.read_bytes()
                except OSError as ex:
                    cls._logger.error(
                        f'Failed to read source [{source_path}]: {ex}'
                    )
                    continue

                artifact = cls.generate(source, filename=str(source_path), options=options)

                output_path = source_path.with_name(config.output_filename)
                try:
                    output_path.write_bytes(artifact.text.encode('utf-8'))
                except OSError as ex:
                    cls._logger.error(
                        f'Failed to write generated code [{output_path}]: {ex}'
                    )
                    continue

                written.append(output_path)

            span.set_attribute('artifacts', len(written))

        return written

    @classmethod
    def _find_sources(cls, directory: Path, filename: str) -> Iterator[Path]:
        """Yield the files named `filename`, sorted by name at each level."""
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as ex:
            cls._logger.error(f'Failed to read directory [{directory}]: {ex}')
            return

        for entry in entries:
            if entry.is_dir() and not entry.is_symlink():
                yield from cls._find_sources(entry, filename)
            elif entry.name == filename and entry.is_file():
                yield entry
