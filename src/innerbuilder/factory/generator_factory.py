from typing import Optional

from innerbuilder.generators.base_generator import BaseGenerator
from innerbuilder.generators.java_builder_generator import JavaBuilderGenerator
from innerbuilder.models.generator_config import GeneratorConfig
from innerbuilder.services.generate_command import BaseNotifier


class GeneratorFactory:
    """Factory for creating language-specific builder generators."""

    @staticmethod
    def create_generator(language: str, config: Optional[GeneratorConfig] = None,
                         notifier: Optional[BaseNotifier] = None) -> BaseGenerator:
        """Create a generator for the specified language."""
        language = language.lower()
        if language == 'java':
            return JavaBuilderGenerator(config or GeneratorConfig(), notifier)
        else:
            raise ValueError(f"Unsupported language: {language}")
