from typing import List

from innerbuilder.models.domain_models import Field, JavaClass, Method, RawMember
from innerbuilder.models.generator_config import GeneratorConfig


class JavaSourceRenderer:
    """Renders the structural class model back to Java source text."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    def render(self, java_class: JavaClass, depth: int = 0) -> str:
        return '\n'.join(self._render_class(java_class, depth)) + '\n'

    def _indent(self, depth: int) -> str:
        return self.config.indent * depth

    def _reindent(self, text: str, depth: int) -> List[str]:
        prefix = self._indent(depth)
        return [prefix + line if line.strip() else '' for line in text.rstrip().split('\n')]

    def _render_class(self, java_class: JavaClass, depth: int) -> List[str]:
        prefix = self._indent(depth)
        lines = [prefix + annotation for annotation in java_class.annotations]

        header = ' '.join(java_class.modifiers + ['class', java_class.name])
        if java_class.type_parameters:
            header += java_class.type_parameters
        if java_class.extends:
            header += f" extends {java_class.extends}"
        if java_class.implements:
            header += f" implements {', '.join(java_class.implements)}"
        if java_class.permits:
            header += f" permits {', '.join(java_class.permits)}"
        lines.append(f"{prefix}{header} {{")

        previous = None
        for member in java_class.members:
            if previous is not None and not self._attached(previous, member):
                lines.append('')
            lines.extend(self._render_member(member, depth + 1))
            previous = member

        lines.append(f"{prefix}}}")
        return lines

    def _attached(self, previous, member) -> bool:
        """Consecutive fields, and a comment with the member it documents, stay together."""
        if isinstance(previous, Field) and isinstance(member, Field):
            return True
        return isinstance(previous, RawMember) and previous.source_text.lstrip().startswith(('//', '/*'))

    def _render_member(self, member, depth: int) -> List[str]:
        if isinstance(member, JavaClass):
            return self._render_class(member, depth)
        if isinstance(member, RawMember):
            return self._reindent(member.source_text, depth)
        if member.source_text is not None:
            return self._reindent(member.source_text, depth)
        if isinstance(member, Field):
            return self._render_field(member, depth)
        return self._render_method(member, depth)

    def _render_field(self, field: Field, depth: int) -> List[str]:
        prefix = self._indent(depth)
        lines = [prefix + annotation for annotation in field.annotations]
        declaration = ' '.join(field.modifiers + [field.type, field.name])
        if field.initializer is not None:
            declaration += f" = {field.initializer}"
        lines.append(f"{prefix}{declaration};")
        return lines

    def _render_method(self, method: Method, depth: int) -> List[str]:
        prefix = self._indent(depth)
        lines = [prefix + annotation for annotation in method.annotations]

        parts = list(method.modifiers)
        if method.type_parameters:
            parts.append(method.type_parameters)
        if method.return_type is not None:
            parts.append(method.return_type)
        parameters = ', '.join(f"{p.type} {p.name}" for p in method.parameters)
        declaration = ' '.join(parts + [f"{method.name}({parameters})"])
        if method.throws:
            declaration += f" throws {', '.join(method.throws)}"

        if method.body is None:
            lines.append(f"{prefix}{declaration};")
            return lines

        lines.append(f"{prefix}{declaration} {{")
        for statement in method.body:
            lines.extend(self._reindent(statement, depth + 1))
        lines.append(f"{prefix}}}")
        return lines
