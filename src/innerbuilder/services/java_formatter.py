import logging
import re
from typing import Union

from innerbuilder.models.domain_models import Field, JavaClass, Method, Parameter
from innerbuilder.processors.java_processor import canonical_type

logger = logging.getLogger(__name__)

# A lone `=`, not part of ==, !=, <=, >=, or a compound assignment
_ASSIGNMENT = re.compile(r'\s*(?<![=!<>+\-*/%&|^])=(?!=)\s*')


def normalize_statement(statement: str) -> str:
    """Normalize the layout of one single-line statement."""
    if '"' in statement or "'" in statement or '\n' in statement:
        return statement
    text = re.sub(r'\s+', ' ', statement).strip()
    text = _ASSIGNMENT.sub(' = ', text)
    text = re.sub(r'\s*,\s*', ', ', text)
    text = re.sub(r'\s+([;)])', r'\1', text)
    text = re.sub(r'\(\s+', '(', text)
    return text


class JavaFormatter:
    """Normalizes the layout of generated members in place."""

    def reformat(self, node: Union[JavaClass, Method, Field]):
        if isinstance(node, JavaClass):
            for member in node.members:
                if isinstance(member, (JavaClass, Method, Field)):
                    self.reformat(member)
        elif isinstance(node, Method):
            self._reformat_method(node)
        elif isinstance(node, Field):
            if node.source_text is None:
                node.type = canonical_type(node.type)
        return node

    def _reformat_method(self, method: Method) -> None:
        # Members carrying verbatim source keep the user's layout
        if method.source_text is not None:
            return
        method.parameters = [Parameter(type=canonical_type(p.type), name=p.name) for p in method.parameters]
        if method.return_type is not None:
            method.return_type = canonical_type(method.return_type)
        if method.body is not None:
            method.body = [normalize_statement(s) for s in method.body]
        logger.debug(f"Reformatted {method.signature()}")
