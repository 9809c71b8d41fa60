from logging import Logger
from typing import List, Optional

from tracegen_core.exceptions import NoTargetException, ShapeMismatchException
from tracegen_core.extraction.shapes import SHAPE_MATCHERS
from tracegen_core.logging import create_null_logger
from tracegen_core.models import (
    ImportEntry,
    InterfaceDeclaration,
    MethodDescriptor,
    MethodSignature,
    ServiceTarget,
    SourceUnit,
)
from tracegen_core.tracing import tracer

DEFAULT_SUFFIX = 'Client'


def is_client_interface(declaration: InterfaceDeclaration, suffix: str = DEFAULT_SUFFIX) -> bool:
    return declaration.is_exported() and declaration.name.endswith(suffix)


def match_method(declaration: InterfaceDeclaration, signature: MethodSignature) -> MethodDescriptor:
    """Match the method against the known shapes, raising when none fits."""
    reasons = []
    for matcher in SHAPE_MATCHERS:
        descriptor, reason = matcher.match(signature)
        if descriptor is not None:
            return descriptor
        reasons.append(f'{matcher.shape.value}: {reason}')

    raise ShapeMismatchException(
        '; '.join(reasons),
        interface=declaration.name,
        method=signature.name,
    )


def resolve_import(full_service_name: str, imports: List[ImportEntry]) -> Optional[ImportEntry]:
    """Find the import of the Go package holding the service messages.

    `shop.v1.OrderService` is served by the first import whose path contains
    `shop/v1`.

    A name without a package, `OrderService` or an empty one, is contained in
    every path and resolves to the first import.
    """
    package_path = '/'.join(full_service_name.split('.')[:-1])

    for entry in imports:
        if package_path in entry.path:
            return entry
    return None


def package_name(entry: ImportEntry) -> str:
    """The name an import is referenced by: its alias or the last path element."""
    return entry.alias or entry.path.rsplit('/', 1)[-1]


def resolve_qualifier(qualifier: str, imports: List[ImportEntry]) -> Optional[ImportEntry]:
    """Find the import a qualified type such as `connect.Request` refers to."""
    for entry in imports:
        if package_name(entry) == qualifier:
            return entry
    return None


def envelope_imports(
    declaration: InterfaceDeclaration,
    methods: List[MethodDescriptor],
    imports: List[ImportEntry],
    logger: Logger,
) -> List[ImportEntry]:
    """Imports needed by the envelope types of the methods, in first use order."""
    entries = []
    unresolved = []

    for method in methods:
        for envelope in (method.request_envelope, method.response_envelope):
            if '.' not in envelope:
                continue

            qualifier = envelope.split('.')[0]
            entry = resolve_qualifier(qualifier, imports)
            if entry is None:
                if qualifier not in unresolved:
                    unresolved.append(qualifier)
                    logger.warning(
                        f'No import found for package {qualifier} used by {declaration.name}.{method.name}'
                    )
            elif entry not in entries:
                entries.append(entry)

    return entries


@tracer.instrument('extract')
def extract_targets(
    unit: SourceUnit,
    suffix: str = DEFAULT_SUFFIX,
    logger: Logger = None,
) -> List[ServiceTarget]:
    """Select the RPC client interfaces of a source unit.

    Parameters
    ----------
    unit : SourceUnit
        The indexed source file
    suffix : str, optional
        Suffix of the client interface names, by default `Client`
    logger : Logger, optional
        Receives warnings about unresolved service names and imports

    Returns
    -------
    List[ServiceTarget]
        The targets in declaration order, their methods in declaration order

    Throws
    -------
    ShapeMismatchException
        If a client interface has a method that cannot be instrumented
    NoTargetException
        If the unit declares no client interface
    """
    if logger is None:
        logger = create_null_logger(name='tracegen.extractor')

    targets = []

    for declaration in unit.interfaces:
        if not is_client_interface(declaration, suffix):
            continue

        if declaration.embedded:
            raise ShapeMismatchException(
                'embedded interfaces are not supported',
                interface=declaration.name,
                method=declaration.embedded[0],
            )

        service_name = declaration.name[: len(declaration.name) - len(suffix)]

        target = ServiceTarget(
            service_name=service_name,
            client_interface_name=declaration.name,
            methods=[match_method(declaration, method) for method in declaration.methods],
        )
        target.envelope_imports = envelope_imports(
            declaration, target.methods, unit.imports, logger
        )

        constant = unit.constant(f'{service_name}Name')
        if constant is not None and constant.value is not None:
            target.full_service_name = constant.value
        else:
            logger.warning(
                f'No {service_name}Name constant found, the tracer of {declaration.name} will have an empty name'
            )

        entry = resolve_import(target.full_service_name, unit.imports)
        if entry is not None:
            target.import_alias = entry.alias
            target.import_path = entry.path
            if '.' not in target.full_service_name:
                logger.warning(
                    f'Service name of {declaration.name} has no package, using the first import {entry.path}'
                )
        else:
            logger.warning(
                f'No import found for the messages of {declaration.name}, the generated code will not compile'
            )

        targets.append(target)

    if not targets:
        raise NoTargetException(
            'Could not find connectrpc client interface', filename=unit.filename
        )

    return targets
