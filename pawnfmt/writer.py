import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional

from pawnfmt.syntax import EXPRESSION_KINDS, FormatError, NodeKind, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Formatting options."""
    indent_size: int = 4
    use_tabs: bool = False
    max_blank_lines: int = 1  # blank lines kept between top-level items


class UnexpectedKindError(FormatError):
    """Recorded when a writer meets a child it has no rule for."""
    def __init__(self, kind: str, context: str, row: Optional[int] = None):
        self.kind = kind
        self.context = context
        self.row = row
        super().__init__(
            f"Unexpected kind {kind} in {context}" + (f" (line {row + 1})" if row is not None else "")
        )


class Writer:
    """Append-only output buffer plus indentation state for one formatting run."""

    def __init__(self, settings: Optional[Settings] = None, expression_kinds=EXPRESSION_KINDS):
        self.settings = settings or Settings()
        self.indent_level = 0
        self.diagnostics: List[FormatError] = []
        self._expression_kinds = expression_kinds
        self._chunks: List[str] = []

    def push(self, text: str):
        if text:
            self._chunks.append(text)

    def write_node(self, node: SyntaxNode):
        self.push(node.text())

    def write_indent(self):
        unit = '\t' if self.settings.use_tabs else ' ' * self.settings.indent_size
        self.push(unit * self.indent_level)

    def breakl(self):
        self.push('\n')

    def ends_with(self, suffix: str) -> bool:
        tail = ''
        for chunk in reversed(self._chunks):
            tail = chunk + tail
            if len(tail) >= len(suffix):
                break
        return tail.endswith(suffix)

    def getvalue(self) -> str:
        return ''.join(self._chunks)

    def is_expression(self, kind: NodeKind) -> bool:
        return kind in self._expression_kinds

    def unexpected(self, node: SyntaxNode, context: str):
        diagnostic = UnexpectedKindError(node.kind, context, node.start_row)
        self.diagnostics.append(diagnostic)
        logger.warning('%s', diagnostic)

    @contextmanager
    def indent(self):
        self.indent_level += 1
        try:
            yield
        finally:
            self.indent_level -= 1
