"""Method signature shapes supported by the extractor.

Each `MethodShape` has a matcher turning a matching `MethodSignature` into a
`MethodDescriptor`. A matcher returns None together with the reason the
signature was rejected, so that the extractor can report why no shape fits.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from tracegen_core.models import (
    GenericTypeRef,
    MethodDescriptor,
    MethodShape,
    MethodSignature,
    NamedTypeRef,
    Parameter,
    PointerTypeRef,
    QualifiedTypeRef,
)

MatchResult = Tuple[Optional[MethodDescriptor], Optional[str]]


def envelope_payload(parameter: Parameter) -> Optional[GenericTypeRef]:
    """Return the envelope when the parameter type is `*Envelope[T]` with `T` a qualified type."""
    pointer = parameter.type
    if not isinstance(pointer, PointerTypeRef):
        return None

    envelope = pointer.element
    if not isinstance(envelope, GenericTypeRef) or len(envelope.arguments) != 1:
        return None

    if not isinstance(envelope.arguments[0], QualifiedTypeRef):
        return None

    return envelope


class ShapeMatcher(ABC):
    shape: MethodShape

    @abstractmethod
    def match(self, signature: MethodSignature) -> MatchResult:
        pass


class UnaryEnvelopeMatcher(ShapeMatcher):
    """Matches `Method(ctx, *Request[pkg.Req]) (*Response[pkg.Res], error)`."""

    shape = MethodShape.UNARY_ENVELOPE

    def match(self, signature: MethodSignature) -> MatchResult:
        parameters = signature.parameters
        results = signature.results

        if len(parameters) != 2:
            return None, f'expected 2 parameters, found {len(parameters)}'
        if any(p.variadic for p in parameters):
            return None, 'variadic parameters are not supported'

        request = envelope_payload(parameters[1])
        if request is None:
            return None, (
                f'second parameter must be a pointer to an envelope of a qualified type, found {parameters[1].type}'
            )

        if len(results) != 2:
            return None, f'expected 2 results, found {len(results)}'

        response = envelope_payload(results[0])
        if response is None:
            return None, (
                f'first result must be a pointer to an envelope of a qualified type, found {results[0].type}'
            )

        error = results[1].type
        if not isinstance(error, NamedTypeRef) or error.name != 'error':
            return None, f'second result must be error, found {results[1].type}'

        return (
            MethodDescriptor(
                name=signature.name,
                request_type=str(request.arguments[0]),
                response_type=str(response.arguments[0]),
                request_envelope=str(request.base),
                response_envelope=str(response.base),
                shape=self.shape,
            ),
            None,
        )


SHAPE_MATCHERS: Tuple[ShapeMatcher, ...] = (UnaryEnvelopeMatcher(),)
"""Matchers tried in order against every client method"""
