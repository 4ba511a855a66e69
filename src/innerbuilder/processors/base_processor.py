from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from innerbuilder.models.domain_models import Field, JavaClass, Method
from innerbuilder.models.generator_config import GeneratorConfig


class BaseModelProvider(ABC):
    """Creates and loads structural class model nodes for one source language."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    @abstractmethod
    def process_file(self, file_path: Path) -> List[JavaClass]:
        """Load the top-level classes declared in a source file."""
        pass

    @abstractmethod
    def parse_source(self, content: str, file_path: str = "") -> List[JavaClass]:
        """Load the top-level classes declared in source text."""
        pass

    @abstractmethod
    def create_class(self, name: str) -> JavaClass:
        """Create an empty class node."""
        pass

    @abstractmethod
    def create_field(self, name: str, type_text: str) -> Field:
        """Create a field node, rejecting malformed names or types."""
        pass

    @abstractmethod
    def create_method_from_text(self, text: str) -> Method:
        """Create a method or constructor node from its declaration text."""
        pass

    @abstractmethod
    def canonical_type_text(self, field: Field) -> str:
        """Type text used when the field's type is written into generated code."""
        pass

    @abstractmethod
    def generate_setter_prototype(self, field: Field) -> Method:
        """Conventional setter for a field, used for signature lookups."""
        pass
