import logging
import re
import textwrap
from pathlib import Path
from typing import List, Optional, Tuple

from tree_sitter import Language, Parser, Node

from innerbuilder.processors.base_processor import BaseModelProvider
from innerbuilder.models.domain_models import Field, JavaClass, Method, Parameter, RawMember
from innerbuilder.models.errors import GenerationError
from innerbuilder.models.generator_config import GeneratorConfig

logger = logging.getLogger(__name__)

MODIFIER_KEYWORDS = {
    'public', 'protected', 'private', 'abstract', 'static', 'final', 'transient',
    'volatile', 'synchronized', 'native', 'strictfp', 'default', 'sealed', 'non-sealed',
}

JAVA_KEYWORDS = {
    'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch', 'char', 'class',
    'const', 'continue', 'default', 'do', 'double', 'else', 'enum', 'extends', 'final',
    'finally', 'float', 'for', 'goto', 'if', 'implements', 'import', 'instanceof', 'int',
    'interface', 'long', 'native', 'new', 'package', 'private', 'protected', 'public',
    'return', 'short', 'static', 'strictfp', 'super', 'switch', 'synchronized', 'this',
    'throw', 'throws', 'transient', 'try', 'void', 'volatile', 'while', 'true', 'false',
    'null', '_',
}

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

PROBE_CLASS_NAME = '__InnerBuilderProbe__'


def read_source(file_path: Path, encoding: str = 'utf-8') -> Tuple[str, str]:
    """Read file content with encoding fallback.

    Returns the text and the encoding it was decoded with.
    """
    try:
        with open(file_path, 'r', encoding=encoding) as f:
            return f.read(), encoding
    except UnicodeDecodeError:
        with open(file_path, 'r', encoding='latin1') as f:
            return f.read(), 'latin1'


def canonical_type(type_text: str) -> str:
    """`Map< String ,List<Integer> >` -> `Map<String, List<Integer>>`."""
    text = re.sub(r'\s+', ' ', type_text).strip()
    text = re.sub(r'\s*([<>\[\],])\s*', r'\1', text)
    return text.replace(',', ', ')


def _text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text.decode('utf8')


class JavaModelProvider(BaseModelProvider):
    """Structural model provider for Java, backed by tree-sitter."""

    def __init__(self, config: GeneratorConfig, language: Language, parser: Parser):
        super().__init__(config)
        self.language = language
        self.parser = parser

    # ---------------- Loading ----------------

    def process_file(self, file_path: Path) -> List[JavaClass]:
        """Process a single Java file and return its top-level classes."""
        try:
            content, encoding = read_source(file_path, self.config.source_encoding)
        except OSError as e:
            raise GenerationError.tooling(f"Cannot read {file_path}: {e}") from e
        if encoding != self.config.source_encoding:
            logger.warning(f"{file_path} is not valid {self.config.source_encoding}, read as {encoding}")
        return self.parse_source(content, str(file_path))

    def parse_source(self, content: str, file_path: str = "") -> List[JavaClass]:
        tree = self.parser.parse(bytes(content, 'utf8'))
        root_node = tree.root_node
        if root_node.has_error:
            logger.warning(f"Syntax errors in {file_path or '<source>'}, loading what could be parsed")

        package = self._extract_package(root_node)
        classes = []
        for child in root_node.named_children:
            if child.type == 'class_declaration':
                classes.append(self._parse_class_node(child, package, file_path))
        logger.debug(f"Loaded {len(classes)} top-level classes from {file_path or '<source>'}")
        return classes

    def _extract_package(self, root_node: Node) -> str:
        for child in root_node.named_children:
            if child.type == 'package_declaration':
                for package_child in child.named_children:
                    if package_child.type in ('scoped_identifier', 'identifier'):
                        return _text(package_child)
        return ""

    def _extract_modifiers(self, node: Node) -> Tuple[List[str], List[str]]:
        """Return (modifiers, annotations) of a declaration node."""
        modifiers = []
        annotations = []
        for child in node.children:
            if child.type == 'modifiers':
                for modifier in child.children:
                    if modifier.type in MODIFIER_KEYWORDS:
                        modifiers.append(modifier.type)
                    elif modifier.type in ('annotation', 'marker_annotation'):
                        annotations.append(_text(modifier))
        return modifiers, annotations

    def _member_text(self, node: Node) -> str:
        """Member source with its original indentation removed."""
        column = node.start_point[1]
        return textwrap.dedent(' ' * column + _text(node))

    def _parse_class_node(self, class_node: Node, package: str, file_path: str) -> JavaClass:
        modifiers, annotations = self._extract_modifiers(class_node)
        superclass_node = class_node.child_by_field_name('superclass')
        extends = None
        if superclass_node is not None and superclass_node.named_children:
            extends = _text(superclass_node.named_children[0])

        implements = []
        interfaces_node = class_node.child_by_field_name('interfaces')
        if interfaces_node is not None:
            for child in interfaces_node.named_children:
                if child.type == 'type_list':
                    implements.extend(_text(t) for t in child.named_children)

        permits = []
        for child in class_node.children:
            if child.type == 'permits':
                for type_list in child.named_children:
                    if type_list.type == 'type_list':
                        permits.extend(_text(t) for t in type_list.named_children)

        type_parameters = class_node.child_by_field_name('type_parameters')
        java_class = JavaClass(
            name=_text(class_node.child_by_field_name('name')),
            modifiers=modifiers,
            annotations=annotations,
            extends=extends,
            implements=implements,
            permits=permits,
            type_parameters=_text(type_parameters) if type_parameters is not None else None,
            package=package,
            file_path=file_path,
            source_span=(class_node.start_byte, class_node.end_byte),
        )

        body = class_node.child_by_field_name('body')
        if body is not None:
            for child in body.named_children:
                # loaded members keep their source order
                for member in self._parse_member(child, package, file_path):
                    if isinstance(member, JavaClass):
                        member.containing_class = java_class
                    java_class.members.append(member)
        return java_class

    def _parse_member(self, node: Node, package: str, file_path: str) -> list:
        if node.type == 'field_declaration':
            return self._parse_field_declaration(node)
        if node.type in ('method_declaration', 'constructor_declaration'):
            return [self._parse_method_node(node)]
        if node.type == 'class_declaration':
            return [self._parse_class_node(node, package, file_path)]
        return [RawMember(source_text=self._member_text(node))]

    def _parse_field_declaration(self, field_node: Node) -> List[Field]:
        """Parse a field declaration; `int a, b;` yields two fields."""
        modifiers, annotations = self._extract_modifiers(field_node)
        field_type = _text(field_node.child_by_field_name('type'))
        declarators = field_node.children_by_field_name('declarator')
        fields = []
        for declarator in declarators:
            declared_type = field_type
            for child in declarator.children:
                if child.type == 'dimensions':
                    declared_type += _text(child)
            value = declarator.child_by_field_name('value')
            fields.append(Field(
                name=_text(declarator.child_by_field_name('name')),
                type=declared_type,
                modifiers=list(modifiers),
                annotations=list(annotations),
                initializer=_text(value) if value is not None else None,
                source_text=self._member_text(field_node) if len(declarators) == 1 else None,
            ))
        return fields

    def _parse_method_node(self, method_node: Node) -> Method:
        """Process a single method or constructor node."""
        modifiers, annotations = self._extract_modifiers(method_node)
        is_constructor = method_node.type == 'constructor_declaration'

        throws = []
        for child in method_node.children:
            if child.type == 'throws':
                throws.extend(_text(t) for t in child.named_children)

        body_node = method_node.child_by_field_name('body')
        body = None
        if body_node is not None:
            body = [_text(statement) for statement in body_node.named_children]

        type_parameters = method_node.child_by_field_name('type_parameters')
        return Method(
            name=_text(method_node.child_by_field_name('name')),
            parameters=self._extract_method_parameters(method_node),
            return_type=None if is_constructor else _text(method_node.child_by_field_name('type')),
            modifiers=modifiers,
            body=body,
            annotations=annotations,
            type_parameters=_text(type_parameters) if type_parameters is not None else None,
            throws=throws,
            source_text=self._member_text(method_node),
        )

    def _extract_method_parameters(self, method_node: Node) -> List[Parameter]:
        parameters = []
        parameters_node = method_node.child_by_field_name('parameters')
        if parameters_node is None:
            return parameters
        for child in parameters_node.named_children:
            if child.type == 'formal_parameter':
                param_type = _text(child.child_by_field_name('type'))
                for sub in child.children:
                    if sub.type == 'dimensions':
                        param_type += _text(sub)
                parameters.append(Parameter(type=param_type, name=_text(child.child_by_field_name('name'))))
            elif child.type == 'spread_parameter':
                parts = [c for c in child.named_children if c.type != 'modifiers']
                if len(parts) >= 2:
                    declarator = parts[-1]
                    name = declarator.child_by_field_name('name') or declarator
                    parameters.append(Parameter(type=_text(parts[0]) + '...', name=_text(name)))
        return parameters

    # ---------------- Node creation ----------------

    def _check_identifier(self, name: str) -> None:
        if not IDENTIFIER_PATTERN.match(name or '') or name in JAVA_KEYWORDS:
            raise GenerationError.structure(f"'{name}' is not a valid Java identifier")

    def _parse_member_text(self, text: str) -> Node:
        """Parse one member declaration inside a probe class and return its node."""
        source = f"class {PROBE_CLASS_NAME} {{\n{text}\n}}"
        tree = self.parser.parse(bytes(source, 'utf8'))
        if tree.root_node.has_error:
            raise GenerationError.structure(f"Malformed declaration: {text}")
        class_node = tree.root_node.named_children[0]
        members = class_node.child_by_field_name('body').named_children
        if len(members) != 1:
            raise GenerationError.structure(f"Expected exactly one declaration: {text}")
        return members[0]

    def create_class(self, name: str) -> JavaClass:
        self._check_identifier(name)
        return JavaClass(name=name, modifiers=['public'])

    def create_field(self, name: str, type_text: str) -> Field:
        self._check_identifier(name)
        node = self._parse_member_text(f"private {type_text} {name};")
        if node.type != 'field_declaration':
            raise GenerationError.structure(f"Not a field declaration: {type_text} {name}")
        field = self._parse_field_declaration(node)[0]
        # Generated members are rendered from structure, not from probe text
        field.source_text = None
        return field

    def create_method_from_text(self, text: str) -> Method:
        node = self._parse_member_text(text)
        if node.type not in ('method_declaration', 'constructor_declaration'):
            raise GenerationError.structure(f"Not a method declaration: {text}")
        method = self._parse_method_node(node)
        method.source_text = None
        return method

    def canonical_type_text(self, field: Field) -> str:
        return canonical_type(field.type)

    def generate_setter_prototype(self, field: Field) -> Method:
        setter_name = self.config.setter_prefix + field.name[:1].upper() + field.name[1:]
        modifiers = ['public', 'static'] if field.is_static else ['public']
        return Method(
            name=setter_name,
            parameters=[Parameter(type=self.canonical_type_text(field), name=field.name)],
            return_type='void',
            modifiers=modifiers,
            body=[f"this.{field.name} = {field.name};"],
        )
