import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

ACCESS_MODIFIERS = ('public', 'protected', 'private')

# Canonical Java modifier order
MODIFIER_ORDER = (
    'public', 'protected', 'private', 'abstract', 'static', 'final',
    'transient', 'volatile', 'synchronized', 'native', 'strictfp', 'default',
    'sealed', 'non-sealed',
)


def normalize_type_text(type_text: str) -> str:
    """Collapse whitespace in a type so `Map<K, V>` and `Map<K,V>` compare equal."""
    return re.sub(r'\s+', '', type_text or '')


class ModifierOwner:
    """Modifier flag access shared by classes, fields and methods."""

    modifiers: List[str]

    def has_modifier(self, modifier: str) -> bool:
        return modifier in self.modifiers

    def set_modifier(self, modifier: str, value: bool) -> None:
        current = [m for m in self.modifiers if m != modifier]
        if value:
            if modifier in ACCESS_MODIFIERS:
                current = [m for m in current if m not in ACCESS_MODIFIERS]
            current.append(modifier)
        current.sort(key=lambda m: MODIFIER_ORDER.index(m) if m in MODIFIER_ORDER else len(MODIFIER_ORDER))
        self.modifiers = current
        self._touch()

    def _touch(self) -> None:
        pass


@dataclass
class Parameter:
    type: str
    name: str


@dataclass(frozen=True)
class MethodSignature:
    name: str
    parameter_types: Tuple[str, ...]
    is_constructor: bool

    def __str__(self) -> str:
        return f"{self.name}({', '.join(self.parameter_types)})"


@dataclass
class Field(ModifierOwner):
    name: str
    type: str
    modifiers: List[str] = field(default_factory=list)
    annotations: List[str] = field(default_factory=list)
    initializer: Optional[str] = None
    source_text: Optional[str] = None

    @property
    def is_final(self) -> bool:
        return self.has_modifier('final')

    @property
    def is_static(self) -> bool:
        return self.has_modifier('static')

    def _touch(self) -> None:
        self.source_text = None


@dataclass
class Method(ModifierOwner):
    """A method or constructor. Constructors have no return type."""
    name: str
    parameters: List[Parameter] = field(default_factory=list)
    return_type: Optional[str] = None
    modifiers: List[str] = field(default_factory=list)
    body: Optional[List[str]] = None
    annotations: List[str] = field(default_factory=list)
    type_parameters: Optional[str] = None
    throws: List[str] = field(default_factory=list)
    source_text: Optional[str] = None

    @property
    def is_constructor(self) -> bool:
        return self.return_type is None

    def signature(self) -> MethodSignature:
        return MethodSignature(
            name=self.name,
            parameter_types=tuple(normalize_type_text(p.type) for p in self.parameters),
            is_constructor=self.is_constructor,
        )

    def _touch(self) -> None:
        self.source_text = None


@dataclass
class RawMember:
    """Class-body text the model keeps verbatim (comments, initializers, enums...)."""
    source_text: str


Member = Union[Field, Method, RawMember, 'JavaClass']


@dataclass(eq=False)
class JavaClass(ModifierOwner):
    name: str
    modifiers: List[str] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)
    extends: Optional[str] = None
    implements: List[str] = field(default_factory=list)
    permits: List[str] = field(default_factory=list)
    annotations: List[str] = field(default_factory=list)
    type_parameters: Optional[str] = None
    package: str = ""
    file_path: str = ""
    source_span: Optional[Tuple[int, int]] = None
    superclass: Optional['JavaClass'] = field(default=None, repr=False)
    containing_class: Optional['JavaClass'] = field(default=None, repr=False)

    @property
    def fields(self) -> List[Field]:
        return [m for m in self.members if isinstance(m, Field)]

    @property
    def methods(self) -> List[Method]:
        return [m for m in self.members if isinstance(m, Method) and not m.is_constructor]

    @property
    def constructors(self) -> List[Method]:
        return [m for m in self.members if isinstance(m, Method) and m.is_constructor]

    @property
    def inner_classes(self) -> List['JavaClass']:
        return [m for m in self.members if isinstance(m, JavaClass)]

    @property
    def is_abstract(self) -> bool:
        return self.has_modifier('abstract')

    @property
    def qualified_name(self) -> str:
        """Dotted name through the enclosing classes, e.g. `Person.Builder`."""
        names = []
        current = self
        while current is not None:
            names.append(current.name)
            current = current.containing_class
        return '.'.join(reversed(names))

    @property
    def outermost_class(self) -> 'JavaClass':
        current = self
        while current.containing_class is not None:
            current = current.containing_class
        return current

    def find_inner_class_by_name(self, name: str) -> Optional['JavaClass']:
        for inner in self.inner_classes:
            if inner.name == name:
                return inner
        return None

    def find_field_by_name(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def local_type_name(self, type_text: str) -> str:
        """Drop qualifiers that name this class or an enclosing one.

        Inside `Person`, `com.acme.Person.Builder` and `Person.Builder` both
        resolve to `Builder`.
        """
        text = normalize_type_text(type_text)
        package = self.outermost_class.package
        if package and text.startswith(package + '.'):
            text = text[len(package) + 1:]
        enclosing = []
        current = self
        while current is not None:
            enclosing.append(current.name)
            current = current.containing_class
        stripped = True
        while stripped:
            stripped = False
            for name in enclosing:
                prefix = name + '.'
                if text.startswith(prefix) and len(text) > len(prefix):
                    text = text[len(prefix):]
                    stripped = True
        return text

    def local_signature(self, method: Method) -> MethodSignature:
        signature = method.signature()
        return MethodSignature(
            name=signature.name,
            parameter_types=tuple(self.local_type_name(t) for t in signature.parameter_types),
            is_constructor=signature.is_constructor,
        )

    def find_method_by_signature(self, prototype: Method, check_bases: bool = False) -> Optional[Method]:
        is_constructor = prototype.is_constructor
        current = self
        visited = set()
        while current is not None and id(current) not in visited:
            visited.add(id(current))
            signature = current.local_signature(prototype)
            for member in current.members:
                if isinstance(member, Method) and current.local_signature(member) == signature:
                    return member
            if not check_bases or is_constructor:
                break
            current = current.superclass
        return None

    def add(self, member: Member) -> Member:
        """Insert a member next to its kind: fields after the last field, methods after
        the last method or constructor, both ahead of nested classes."""
        if isinstance(member, JavaClass):
            member.containing_class = self
            self.members.append(member)
            return member
        if isinstance(member, Field):
            same_kind = [i for i, m in enumerate(self.members) if isinstance(m, Field)]
            later_kinds = (Method, JavaClass)
        elif isinstance(member, Method):
            same_kind = [i for i, m in enumerate(self.members) if isinstance(m, Method)]
            later_kinds = (JavaClass,)
        else:
            self.members.append(member)
            return member
        if same_kind:
            index = same_kind[-1] + 1
        else:
            index = next((i for i, m in enumerate(self.members) if isinstance(m, later_kinds)), len(self.members))
        self.members.insert(index, member)
        return member

    def replace(self, existing: Member, replacement: Member) -> Member:
        index = next(i for i, m in enumerate(self.members) if m is existing)
        if isinstance(replacement, JavaClass):
            replacement.containing_class = self
        self.members[index] = replacement
        return replacement

    def set_superclass(self, superclass: 'JavaClass') -> None:
        self.superclass = superclass
        self.extends = superclass.qualified_name

    def __repr__(self) -> str:
        return f"JavaClass({self.qualified_name!r})"
