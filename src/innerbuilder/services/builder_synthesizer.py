import logging
from typing import Iterable, List, Optional, Union

from innerbuilder.models.domain_models import Field, JavaClass, Method
from innerbuilder.models.generator_config import GeneratorConfig
from innerbuilder.processors.base_processor import BaseModelProvider
from innerbuilder.services.java_formatter import JavaFormatter

logger = logging.getLogger(__name__)


class InnerBuilderSynthesizer:
    """Generates or updates the nested builder of a class for a selection of its fields.

    The target class gains a constructor taking the builder; the builder gets
    one field per selected field, a constructor over the final fields, a copy
    constructor, a fluent setter per non-final field and, for concrete
    classes, a ``build()`` method. Running it again merges into the existing
    builder: fields are matched by name and methods by signature, so nothing
    is duplicated and nothing is removed.
    """

    def __init__(self, provider: BaseModelProvider, formatter: JavaFormatter,
                 config: GeneratorConfig, log: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None):
        self.provider = provider
        self.formatter = formatter
        self.config = config
        self.log = log or logger

    def execute(self, clazz: JavaClass, fields: Iterable[Field]) -> JavaClass:
        fields = list(fields)
        builder_name = self.config.builder_class_name
        containing_class_is_abstract = clazz.is_abstract

        builder_class = clazz.find_inner_class_by_name(builder_name)
        super_builder_class = self.find_builder_class(clazz.superclass)

        if builder_class is None:
            builder_class = clazz.add(self.provider.create_class(builder_name))
            # builder classes are static
            builder_class.set_modifier('static', True)
            if containing_class_is_abstract:
                builder_class.set_modifier('protected', True)
                builder_class.set_modifier('abstract', True)
            self.log.debug(f"Created {builder_class.qualified_name}")

        if super_builder_class is not None and builder_class.extends is None:
            builder_class.set_superclass(super_builder_class)
            self.log.debug(f"{builder_class.qualified_name} extends {super_builder_class.qualified_name}")

        self._add_builder_constructor(clazz, fields, super_builder_class is not None)

        # final fields become constructor parameters of the builder
        final_fields = [f for f in fields if f.is_final]
        non_final_fields = [f for f in fields if not f.is_final]

        for field in final_fields:
            if not self.has_field(builder_class, field):
                builder_field = self.provider.create_field(field.name, self.provider.canonical_type_text(field))
                builder_field.set_modifier('final', True)
                builder_class.add(builder_field)

        for field in non_final_fields:
            if not self.has_field(builder_class, field):
                builder_class.add(self.provider.create_field(field.name, self.provider.canonical_type_text(field)))

        # builder constructor, accepting the final fields
        parameters = ",".join(f"{self.provider.canonical_type_text(f)} {f.name}" for f in final_fields)
        assignments = "".join(f"this.{f.name}={f.name};" for f in final_fields)
        self.add_or_replace_method(builder_class, f"public {builder_name}({parameters}) {{{assignments}}}")

        # copy constructor, accepting an instance of the target class
        copy_name = self.config.copy_parameter_name
        copies = "".join(f"this.{f.name}= {copy_name}.{f.name};" for f in final_fields + non_final_fields)
        self.add_or_replace_method(builder_class, f"public {builder_name}({clazz.name} {copy_name}) {{{copies}}}")

        for field in non_final_fields:
            self.add_or_replace_method(
                builder_class,
                f"public {builder_name} {field.name}({self.provider.canonical_type_text(field)} {field.name}){{"
                f"this.{field.name}={field.name};"
                f"return this;"
                f"}}",
            )

        if not containing_class_is_abstract:
            self.add_or_replace_method(
                builder_class, f"public {clazz.name} build() {{ return new {clazz.name}(this);}}"
            )

        self.formatter.reformat(builder_class)
        self.log.info(
            f"Generated {builder_class.qualified_name} for {len(fields)} fields "
            f"({len(final_fields)} final, {len(non_final_fields)} non-final)"
        )
        return builder_class

    def _add_builder_constructor(self, clazz: JavaClass, fields: List[Field], has_super_builder: bool) -> Method:
        """The target class gets a private (protected if abstract) constructor taking the builder."""
        builder_param = self.config.builder_parameter_name
        visibility = "protected" if clazz.is_abstract else "private"
        statements = []
        if has_super_builder:
            statements.append(f"super({builder_param});")
        for field in fields:
            setter = clazz.find_method_by_signature(self.provider.generate_setter_prototype(field), check_bases=True)
            if setter is None:
                statements.append(f"this.{field.name}= {builder_param}.{field.name};")
            else:
                statements.append(f"{setter.name}({builder_param}.{field.name});")

        text = (f"{visibility} {clazz.name}({self.config.builder_class_name} {builder_param}) "
                f"{{{''.join(statements)}}}")
        return self.formatter.reformat(self.add_or_replace_method(clazz, text))

    def find_builder_class(self, clazz: Optional[JavaClass]) -> Optional[JavaClass]:
        """Nearest class in the superclass chain that has its own builder."""
        visited = set()
        while clazz is not None and id(clazz) not in visited:
            visited.add(id(clazz))
            builder_class = clazz.find_inner_class_by_name(self.config.builder_class_name)
            if builder_class is not None:
                return builder_class
            clazz = clazz.superclass
        return None

    def has_field(self, clazz: JavaClass, field: Field) -> bool:
        return clazz.find_field_by_name(field.name) is not None

    def add_or_replace_method(self, target: JavaClass, method_text: str) -> Method:
        new_method = self.provider.create_method_from_text(method_text)
        existing_method = target.find_method_by_signature(new_method)

        if existing_method is not None:
            target.replace(existing_method, new_method)
            self.log.debug(f"Replaced {target.name}.{new_method.signature()}")
        else:
            target.add(new_method)
            self.log.debug(f"Added {target.name}.{new_method.signature()}")
        return new_method
