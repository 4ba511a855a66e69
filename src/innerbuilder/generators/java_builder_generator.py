import logging
from pathlib import Path
from typing import List, Optional, Sequence

import tree_sitter_java as tsjava
from tree_sitter import Language, Parser

from innerbuilder.generators.base_generator import BaseGenerator
from innerbuilder.models.domain_models import Field, JavaClass
from innerbuilder.models.errors import GenerationError, GenerationResult
from innerbuilder.models.generator_config import GeneratorConfig
from innerbuilder.processors.java_processor import JavaModelProvider
from innerbuilder.services.builder_synthesizer import InnerBuilderSynthesizer
from innerbuilder.services.class_index_builder import ClassIndexBuilder
from innerbuilder.services.generate_command import (
    BaseNotifier, LoggingNotifier, execute_generate_action, handle_result,
)
from innerbuilder.services.java_formatter import JavaFormatter
from innerbuilder.services.result_exporter import ResultExporter
from innerbuilder.services.source_renderer import JavaSourceRenderer

logger = logging.getLogger(__name__)


class JavaBuilderGenerator(BaseGenerator):
    """Generates inner builders for Java classes, implementing the BaseGenerator interface."""

    def __init__(self, config: GeneratorConfig = None, notifier: BaseNotifier = None):
        super().__init__(config or GeneratorConfig())

        # Initialize Tree-sitter components
        try:
            self.language = Language(tsjava.language())
            self.parser = Parser(self.language)
        except Exception as e:
            logger.error(f"Failed to initialize Tree-sitter for Java: {e}")
            raise GenerationError.tooling(f"Tree-sitter Java grammar unavailable: {e}") from e

        # Initialize services
        self.provider = JavaModelProvider(self.config, self.language, self.parser)
        self.formatter = JavaFormatter()
        self.renderer = JavaSourceRenderer(self.config)
        self.class_index_builder = ClassIndexBuilder()
        self.result_exporter = ResultExporter(self.config)
        self.notifier = notifier or LoggingNotifier()

    def load_project(self, root: Path) -> List[JavaClass]:
        if root.is_file():
            java_files = [root]
        else:
            java_files = sorted(root.rglob("*.java"))
        logger.info(f"Found {len(java_files)} Java files")
        if not java_files:
            raise GenerationError.tooling(f"No Java files found at {root}")

        classes = []
        for java_file in java_files:
            classes.extend(self.provider.process_file(java_file))
        self.class_index_builder.link(classes)
        logger.info(f"Loaded {len(classes)} top-level classes")
        return classes

    def find_class(self, classes: List[JavaClass], name: str) -> JavaClass:
        """Look up a class by simple, nested (`Outer.Inner`) or fully qualified name."""
        index = self.class_index_builder.build_class_index(classes)
        if name not in index:
            raise GenerationError.tooling(f"Class {name} not found")
        return index[name]

    def select_fields(self, target: JavaClass, names: Optional[Sequence[str]] = None) -> List[Field]:
        if not names:
            return [f for f in target.fields if not f.is_static]
        selected = []
        for name in names:
            field = target.find_field_by_name(name)
            if field is None:
                raise GenerationError.tooling(f"Field {name} not found in {target.qualified_name}")
            selected.append(field)
        return selected

    def generate(self, target: JavaClass, fields: Sequence[Field],
                 log: Optional[logging.LoggerAdapter] = None) -> GenerationResult:
        log = log or logging.LoggerAdapter(logger, {"target": target.qualified_name})
        synthesizer = InnerBuilderSynthesizer(self.provider, self.formatter, self.config, log)
        result = execute_generate_action(target, fields, synthesizer, self.config.command_name)
        return handle_result(result, self.notifier, log)

    def render(self, target: JavaClass) -> str:
        return self.renderer.render(target.outermost_class)

    def write_in_place(self, target: JavaClass) -> Path:
        outermost = target.outermost_class
        return self.result_exporter.write_in_place(outermost, self.renderer.render(outermost))

    def export(self, target: JavaClass, output_path: Path) -> Path:
        outermost = target.outermost_class
        return self.result_exporter.export(outermost, self.renderer.render(outermost), output_path)
