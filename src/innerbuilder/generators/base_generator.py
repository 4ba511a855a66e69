from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from innerbuilder.models.domain_models import Field, JavaClass
from innerbuilder.models.errors import GenerationResult
from innerbuilder.models.generator_config import GeneratorConfig


class BaseGenerator(ABC):
    """Abstract base class for builder generators across source languages."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    @abstractmethod
    def load_project(self, root: Path) -> List[JavaClass]:
        """Load a source file or every source file under a directory."""
        pass

    @abstractmethod
    def find_class(self, classes: List[JavaClass], name: str) -> JavaClass:
        """Look up a loaded class by name."""
        pass

    @abstractmethod
    def select_fields(self, target: JavaClass, names: Optional[Sequence[str]] = None) -> List[Field]:
        """Resolve the fields to generate for, in generation order."""
        pass

    @abstractmethod
    def generate(self, target: JavaClass, fields: Sequence[Field], log=None) -> GenerationResult:
        """Generate or update the builder of target."""
        pass

    @abstractmethod
    def render(self, target: JavaClass) -> str:
        """Source text of the file-level class containing target."""
        pass

    @abstractmethod
    def write_in_place(self, target: JavaClass) -> Path:
        """Rewrite the source file target was loaded from."""
        pass

    @abstractmethod
    def export(self, target: JavaClass, output_path: Path) -> Path:
        """Write the updated source file under output_path."""
        pass
