# Use an explicit re-export https://github.com/astral-sh/ruff/issues/5697#issuecomment-1631647211

from tracegen_core.models.models import (
    NamedTypeRef as NamedTypeRef,
    QualifiedTypeRef as QualifiedTypeRef,
    PointerTypeRef as PointerTypeRef,
    GenericTypeRef as GenericTypeRef,
    OpaqueTypeRef as OpaqueTypeRef,
    TypeRef as TypeRef,
    ImportEntry as ImportEntry,
    Parameter as Parameter,
    MethodSignature as MethodSignature,
    InterfaceDeclaration as InterfaceDeclaration,
    ConstantDeclaration as ConstantDeclaration,
    SourceUnit as SourceUnit,
    MethodShape as MethodShape,
    MethodDescriptor as MethodDescriptor,
    ServiceTarget as ServiceTarget,
    SynthesisOptions as SynthesisOptions,
    GeneratedArtifact as GeneratedArtifact,
)

from tracegen_core.models.config import (
    TracegenConfig as TracegenConfig,
    TracegenTracingConfig as TracegenTracingConfig,
)
