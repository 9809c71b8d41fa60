from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class NamedTypeRef(BaseModel):
    """A type referenced by a bare identifier, e.g. `error` or `Foo`."""

    kind: Literal['named'] = 'named'
    name: str

    def __str__(self) -> str:
        return self.name


class QualifiedTypeRef(BaseModel):
    """A type referenced through a package selector, e.g. `v1.CreateOrderRequest`."""

    kind: Literal['qualified'] = 'qualified'
    package: str
    name: str

    def __str__(self) -> str:
        return f'{self.package}.{self.name}'


class PointerTypeRef(BaseModel):
    kind: Literal['pointer'] = 'pointer'
    element: 'TypeRef'

    def __str__(self) -> str:
        return f'*{self.element}'


class GenericTypeRef(BaseModel):
    """An instantiated generic type, e.g. `connect.Request[v1.PingRequest]`."""

    kind: Literal['generic'] = 'generic'
    base: 'TypeRef'
    arguments: List['TypeRef']

    def __str__(self) -> str:
        return f'{self.base}[{", ".join(str(a) for a in self.arguments)}]'


class OpaqueTypeRef(BaseModel):
    """Any other type expression (slices, maps, funcs...), kept as source text."""

    kind: Literal['opaque'] = 'opaque'
    text: str

    def __str__(self) -> str:
        return self.text


TypeRef = Annotated[
    Union[NamedTypeRef, QualifiedTypeRef, PointerTypeRef, GenericTypeRef, OpaqueTypeRef],
    Field(discriminator='kind'),
]

PointerTypeRef.model_rebuild()
GenericTypeRef.model_rebuild()


class ImportEntry(BaseModel):
    alias: Optional[str] = None
    """The explicit package name given to the import, if any"""
    path: str
    """The import path, without quotes"""
    line: Optional[int] = None


class Parameter(BaseModel):
    name: Optional[str] = None
    type: TypeRef
    variadic: bool = False


class MethodSignature(BaseModel):
    name: str
    parameters: List[Parameter] = []
    results: List[Parameter] = []
    line: Optional[int] = None


class InterfaceDeclaration(BaseModel):
    name: str
    methods: List[MethodSignature] = []
    embedded: List[str] = []
    """Source text of the embedded interfaces and type constraints"""
    line: Optional[int] = None

    def is_exported(self) -> bool:
        return 'A' <= self.name[:1] <= 'Z'


class ConstantDeclaration(BaseModel):
    name: str
    value: Optional[str] = None
    """The value of string literal constants, None for any other expression"""
    line: Optional[int] = None


class SourceUnit(BaseModel):
    """The structure of a parsed Go source file relevant to code generation."""

    filename: str = 'STDIN'
    package: str
    imports: List[ImportEntry] = []
    interfaces: List[InterfaceDeclaration] = []
    constants: List[ConstantDeclaration] = []

    def constant(self, name: str) -> Optional[ConstantDeclaration]:
        for constant in self.constants:
            if constant.name == name:
                return constant
        return None


class MethodShape(str, Enum):
    """Method signature shapes the extractor knows how to instrument."""

    UNARY_ENVELOPE = 'unary_envelope'
    """`Method(ctx, *Envelope[Req]) (*Envelope[Res], error)`"""


class MethodDescriptor(BaseModel):
    name: str
    request_type: str
    response_type: str
    request_envelope: str = 'connect.Request'
    """Generic type wrapping the request message"""
    response_envelope: str = 'connect.Response'
    """Generic type wrapping the response message"""
    shape: MethodShape = MethodShape.UNARY_ENVELOPE


class ServiceTarget(BaseModel):
    """An RPC client interface selected for instrumentation."""

    service_name: str
    client_interface_name: str
    methods: List[MethodDescriptor] = []
    full_service_name: str = ''
    import_alias: Optional[str] = None
    import_path: Optional[str] = None
    envelope_imports: List[ImportEntry] = []
    """Imports of the packages qualifying the request and response envelopes"""

    @property
    def tracer_name(self) -> str:
        return f'{self.service_name[:1].lower()}{self.service_name[1:]}Tracer'

    @property
    def instrumented_name(self) -> str:
        return f'Instrumented{self.client_interface_name}'

    @property
    def provider_field(self) -> str:
        return f'{self.service_name[:1].lower()}{self.service_name[1:]}Provider'


class SynthesisOptions(BaseModel):
    """Switches selecting which variant of the decorator code is emitted."""

    include_provider_lifecycle: bool = False
    """Emit helpers creating and shutting down one tracer provider per service"""

    runtime_toggle: bool = False
    """Emit a switch to enable or disable instrumentation at runtime"""

    tracer_as_injectable_capability: bool = True
    """Decorators receive their tracer in the constructor instead of using package variables"""


class GeneratedArtifact(BaseModel):
    package: str
    text: str
    targets: List[str] = []
    """Name of the instrumented client interfaces, in emission order"""
