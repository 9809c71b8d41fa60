"""Structural indexing of Go source files with tree-sitter.

Only the top-level declarations code generation relies on are indexed: the
package clause, the import table, interface type declarations and constants.
"""

import re
from logging import Logger
from typing import List, Optional

import tree_sitter
import tree_sitter_go

from tracegen_core.exceptions import ParsingException
from tracegen_core.logging import create_null_logger
from tracegen_core.models import (
    ConstantDeclaration,
    GenericTypeRef,
    ImportEntry,
    InterfaceDeclaration,
    MethodSignature,
    NamedTypeRef,
    OpaqueTypeRef,
    Parameter,
    PointerTypeRef,
    QualifiedTypeRef,
    SourceUnit,
    TypeRef,
)
from tracegen_core.tracing import tracer

GO_LANGUAGE = tree_sitter.Language(tree_sitter_go.language())

# `method_spec` was renamed `method_elem` in tree-sitter-go 0.20
_METHOD_NODES = frozenset({'method_elem', 'method_spec'})

_PARAMETER_NODES = frozenset(
    {'parameter_declaration', 'variadic_parameter_declaration'}
)

_STRING_LITERALS = frozenset({'interpreted_string_literal', 'raw_string_literal'})


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode('utf-8')


def _line(node: tree_sitter.Node) -> int:
    return node.start_point[0] + 1


_ESCAPES = {
    'a': '\a',
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
    '\\': '\\',
    "'": "'",
    '"': '"',
}

_ESCAPE_SEQUENCE = re.compile(
    r'\\(?:([abfnrtv\\"\x27])|x([0-9a-fA-F]{2})|([0-7]{3})|u([0-9a-fA-F]{4})|U([0-9a-fA-F]{8}))'
)


def _unescape(match: re.Match) -> str:
    simple, hexadecimal, octal, short, long = match.groups()
    if simple is not None:
        return _ESCAPES[simple]
    if octal is not None:
        return chr(int(octal, 8))
    return chr(int(hexadecimal or short or long, 16))


def _string_value(node: tree_sitter.Node) -> str:
    """The value of a string literal, with escape sequences resolved."""
    literal = _text(node)
    if node.type == 'raw_string_literal':
        # carriage returns are discarded from raw strings
        return literal[1:-1].replace('\r', '')
    return _ESCAPE_SEQUENCE.sub(_unescape, literal[1:-1])


def _named(node: tree_sitter.Node) -> List[tree_sitter.Node]:
    return [child for child in node.named_children if child.type != 'comment']


def _first_error(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    if node.type == 'ERROR' or node.is_missing:
        return node
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return None


class GoSourceIndexer:
    """Turns Go source code into a `SourceUnit`.

    Example
    -------
    >>> unit = GoSourceIndexer().index(b'package foo\\n', filename='foo.go')
    >>> unit.package
    'foo'
    """

    def __init__(self, logger: Logger = None):
        self._parser = tree_sitter.Parser(GO_LANGUAGE)

        if logger is None:
            logger = create_null_logger(name='tracegen.indexer')

        self._logger = logger

    @tracer.instrument('index')
    def index(self, source: bytes | str, filename: str = 'STDIN') -> SourceUnit:
        """Parse the source and index its top-level declarations.

        Parameters
        ----------
        source : bytes | str
            The Go source code
        filename : str, optional
            Name used in error messages, by default `STDIN`

        Returns
        -------
        SourceUnit
            The indexed declarations, in source order

        Throws
        -------
        ParsingException
            If the source contains syntax errors, is not valid UTF-8 or has no package clause
        """
        if isinstance(source, str):
            source = source.encode('utf-8')

        try:
            source.decode('utf-8')
        except UnicodeDecodeError as ex:
            raise ParsingException(
                'invalid UTF-8 encoding',
                filename=filename,
                line=source[: ex.start].count(b'\n') + 1,
            ) from ex

        tree = self._parser.parse(source)
        root = tree.root_node

        if root.has_error:
            error = _first_error(root)
            raise ParsingException(
                'syntax error',
                filename=filename,
                line=_line(error) if error is not None else None,
            )

        package = None
        imports: List[ImportEntry] = []
        interfaces: List[InterfaceDeclaration] = []
        constants: List[ConstantDeclaration] = []

        for node in _named(root):
            if node.type == 'package_clause':
                package = self._package_name(node)
            elif node.type == 'import_declaration':
                imports.extend(self._imports(node))
            elif node.type == 'type_declaration':
                interfaces.extend(self._interfaces(node))
            elif node.type == 'const_declaration':
                constants.extend(self._constants(node))

        if package is None:
            raise ParsingException('missing package clause', filename=filename)

        self._logger.debug(
            f'Indexed {filename}: {len(imports)} imports, {len(interfaces)} interfaces, {len(constants)} constants'
        )

        return SourceUnit(
            filename=filename,
            package=package,
            imports=imports,
            interfaces=interfaces,
            constants=constants,
        )

    def _package_name(self, node: tree_sitter.Node) -> Optional[str]:
        for child in _named(node):
            if child.type == 'package_identifier':
                return _text(child)
        return None

    def _imports(self, node: tree_sitter.Node) -> List[ImportEntry]:
        entries = []
        for child in _named(node):
            if child.type == 'import_spec_list':
                specs = [spec for spec in _named(child) if spec.type == 'import_spec']
            elif child.type == 'import_spec':
                specs = [child]
            else:
                continue

            for spec in specs:
                name = spec.child_by_field_name('name')
                path = spec.child_by_field_name('path')
                entries.append(
                    ImportEntry(
                        alias=_text(name) if name is not None else None,
                        path=_string_value(path),
                        line=_line(spec),
                    )
                )
        return entries

    def _interfaces(self, node: tree_sitter.Node) -> List[InterfaceDeclaration]:
        declarations = []
        for spec in _named(node):
            if spec.type != 'type_spec':
                continue
            body = spec.child_by_field_name('type')
            if body is None or body.type != 'interface_type':
                continue
            declarations.append(
                self._interface(_text(spec.child_by_field_name('name')), body)
            )
        return declarations

    def _interface(self, name: str, body: tree_sitter.Node) -> InterfaceDeclaration:
        methods = []
        embedded = []
        for element in _named(body):
            if element.type in _METHOD_NODES:
                methods.append(self._method(element))
            else:
                embedded.append(_text(element))

        return InterfaceDeclaration(
            name=name, methods=methods, embedded=embedded, line=_line(body)
        )

    def _method(self, node: tree_sitter.Node) -> MethodSignature:
        result = node.child_by_field_name('result')

        if result is None:
            results = []
        elif result.type == 'parameter_list':
            results = self._parameters(result)
        else:
            results = [Parameter(type=self._type_ref(result))]

        return MethodSignature(
            name=_text(node.child_by_field_name('name')),
            parameters=self._parameters(node.child_by_field_name('parameters')),
            results=results,
            line=_line(node),
        )

    def _parameters(self, node: tree_sitter.Node) -> List[Parameter]:
        parameters = []
        for declaration in _named(node):
            if declaration.type not in _PARAMETER_NODES:
                continue

            type_ref = self._type_ref(declaration.child_by_field_name('type'))
            variadic = declaration.type == 'variadic_parameter_declaration'
            names = [
                name
                for name in declaration.children_by_field_name('name')
                if name.is_named
            ]

            # `a, b string` declares two parameters sharing one type
            if not names:
                parameters.append(Parameter(type=type_ref, variadic=variadic))
            for name in names:
                parameters.append(
                    Parameter(name=_text(name), type=type_ref, variadic=variadic)
                )
        return parameters

    def _type_ref(self, node: tree_sitter.Node) -> TypeRef:
        if node.type == 'type_identifier':
            return NamedTypeRef(name=_text(node))

        if node.type == 'qualified_type':
            return QualifiedTypeRef(
                package=_text(node.child_by_field_name('package')),
                name=_text(node.child_by_field_name('name')),
            )

        if node.type == 'pointer_type':
            return PointerTypeRef(element=self._type_ref(_named(node)[0]))

        if node.type == 'generic_type':
            arguments = node.child_by_field_name('type_arguments')
            return GenericTypeRef(
                base=self._type_ref(node.child_by_field_name('type')),
                arguments=[self._type_ref(arg) for arg in _named(arguments)],
            )

        # Newer grammars wrap every type argument in a `type_elem`
        if node.type in ('type_elem', 'parenthesized_type') and len(_named(node)) == 1:
            return self._type_ref(_named(node)[0])

        return OpaqueTypeRef(text=_text(node))

    def _constants(self, node: tree_sitter.Node) -> List[ConstantDeclaration]:
        constants = []
        for spec in _named(node):
            if spec.type != 'const_spec':
                continue

            value_list = spec.child_by_field_name('value')
            values = _named(value_list) if value_list is not None else []

            for position, name in enumerate(spec.children_by_field_name('name')):
                if name.type != 'identifier':
                    continue
                value = values[position] if position < len(values) else None
                constants.append(
                    ConstantDeclaration(
                        name=_text(name),
                        value=_string_value(value)
                        if value is not None and value.type in _STRING_LITERALS
                        else None,
                        line=_line(spec),
                    )
                )
        return constants
