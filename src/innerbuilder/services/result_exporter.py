import logging
from pathlib import Path
from typing import Tuple

from innerbuilder.models.domain_models import JavaClass
from innerbuilder.models.errors import GenerationError
from innerbuilder.models.generator_config import GeneratorConfig
from innerbuilder.processors.java_processor import read_source

logger = logging.getLogger(__name__)


class ResultExporter:
    """Writes rendered classes back to Java source files."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    def write_in_place(self, java_class: JavaClass, rendered: str) -> Path:
        """Replace the class's original text in the file it was loaded from."""
        if not java_class.file_path or java_class.source_span is None:
            raise GenerationError.tooling(f"{java_class.name} was not loaded from a file")
        file_path = Path(java_class.file_path)
        content, encoding = self._splice(java_class, rendered)
        self._write(file_path, content, encoding)
        logger.info(f"Updated {java_class.name} in {file_path}")
        return file_path

    def export(self, java_class: JavaClass, rendered: str, output_path: Path) -> Path:
        """Write the updated compilation unit under output_path."""
        output_path.mkdir(parents=True, exist_ok=True)
        if java_class.file_path and java_class.source_span is not None:
            file_path = output_path / Path(java_class.file_path).name
            content, encoding = self._splice(java_class, rendered)
        else:
            file_path = output_path / f"{java_class.name}.java"
            content = f"package {java_class.package};\n\n{rendered}" if java_class.package else rendered
            encoding = self.config.source_encoding
        self._write(file_path, content, encoding)
        logger.info(f"Wrote {java_class.name} to {file_path}")
        return file_path

    def _splice(self, java_class: JavaClass, rendered: str) -> Tuple[str, str]:
        """Return the spliced file text and the encoding the file was read with."""
        text, encoding = read_source(Path(java_class.file_path), self.config.source_encoding)
        # Spans are byte offsets into the utf-8 encoding of the loaded text
        content = text.encode('utf8')
        start, end = java_class.source_span
        spliced = content[:start] + rendered.rstrip('\n').encode('utf8') + content[end:]
        return spliced.decode('utf8'), encoding

    def _write(self, file_path: Path, content: str, encoding: str) -> None:
        with open(file_path, 'w', encoding=encoding) as f:
            f.write(content)
