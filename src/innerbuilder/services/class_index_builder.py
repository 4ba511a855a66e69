import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional

from innerbuilder.models.domain_models import JavaClass

logger = logging.getLogger(__name__)


class ClassIndexBuilder:
    """Builds an index of loaded classes and resolves their `extends` clauses."""

    def build_class_index(self, classes: Iterable[JavaClass]) -> Dict[str, JavaClass]:
        """Index every class, nested ones included, by qualified and simple name."""
        index = {}
        for java_class in self._walk(classes):
            qualified = java_class.qualified_name
            full_class_name = f"{java_class.package}.{qualified}" if java_class.package else qualified
            index[full_class_name] = java_class
            index.setdefault(qualified, java_class)
            index.setdefault(java_class.name, java_class)
        return index

    def link(self, classes: List[JavaClass]) -> Dict[str, JavaClass]:
        index = self.build_class_index(classes)
        for java_class in self._walk(classes):
            if not java_class.extends or java_class.superclass is not None:
                continue
            superclass = self._resolve(java_class.extends, index)
            if superclass is None or superclass is java_class:
                logger.debug(f"Unresolved superclass {java_class.extends} of {java_class.qualified_name}")
                continue
            java_class.superclass = superclass
        logger.debug(f"Built class index with {len(index)} entries")
        return index

    def _resolve(self, type_name: str, index: Dict[str, JavaClass]) -> Optional[JavaClass]:
        base_name = re.sub(r'<.*>', '', type_name).strip()
        if base_name in index:
            return index[base_name]
        return index.get(base_name.split('.')[-1])

    def _walk(self, classes: Iterable[JavaClass]) -> Iterator[JavaClass]:
        for java_class in classes:
            yield java_class
            yield from self._walk(java_class.inner_classes)
