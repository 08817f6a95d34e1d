from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class NodeKind(Enum):
    """Kind tags produced by the parser. The value is the raw tag string."""
    # declarations
    TYPE = 'type'
    OLD_TYPE = 'old_type'
    STORAGE_CLASS = 'variable_storage_class'
    VISIBILITY = 'variable_visibility'
    VARIABLE_DECLARATION = 'variable_declaration'
    OLD_VARIABLE_DECLARATION = 'old_variable_declaration'
    SYMBOL = 'symbol'
    DIMENSION = 'dimension'
    FIXED_DIMENSION = 'fixed_dimension'
    DYNAMIC_ARRAY = 'dynamic_array'
    COMMENT = 'comment'
    GLOBAL_VARIABLE_DECLARATION = 'global_variable_declaration'
    OLD_GLOBAL_VARIABLE_DECLARATION = 'old_global_variable_declaration'
    VARIABLE_DECLARATION_STATEMENT = 'variable_declaration_statement'
    OLD_VARIABLE_DECLARATION_STATEMENT = 'old_variable_declaration_statement'

    # file structure
    SOURCE_FILE = 'source_file'
    FUNCTION_DEFINITION = 'function_definition'
    FUNCTION_VISIBILITY = 'function_visibility'
    BLOCK = 'block'
    PREPROC_DIRECTIVE = 'preproc_directive'

    # keywords and punctuation
    NEW = 'new'
    DECL = 'decl'
    CONST = 'const'
    STATIC = 'static'
    COMMA = ','
    SEMICOLON = ';'
    ASSIGN = '='
    COLON = ':'
    LBRACKET = '['
    RBRACKET = ']'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    OPERATOR = 'operator'

    # expressions
    INT_LITERAL = 'int_literal'
    FLOAT_LITERAL = 'float_literal'
    CHAR_LITERAL = 'char_literal'
    STRING_LITERAL = 'string_literal'
    BOOL_LITERAL = 'bool_literal'
    NULL = 'null'
    BINARY_EXPRESSION = 'binary_expression'
    UNARY_EXPRESSION = 'unary_expression'
    PARENTHESIZED_EXPRESSION = 'parenthesized_expression'
    CALL_EXPRESSION = 'call_expression'
    ARRAY_INDEXED_ACCESS = 'array_indexed_access'
    ARRAY_LITERAL = 'array_literal'

    UNKNOWN = 'unknown'


_KIND_BY_TAG = {kind.value: kind for kind in NodeKind if kind is not NodeKind.UNKNOWN}

LITERAL_KINDS = frozenset({
    NodeKind.INT_LITERAL, NodeKind.FLOAT_LITERAL, NodeKind.CHAR_LITERAL,
    NodeKind.STRING_LITERAL, NodeKind.BOOL_LITERAL, NodeKind.NULL,
})

EXPRESSION_KINDS = LITERAL_KINDS | frozenset({
    NodeKind.SYMBOL,
    NodeKind.BINARY_EXPRESSION,
    NodeKind.UNARY_EXPRESSION,
    NodeKind.PARENTHESIZED_EXPRESSION,
    NodeKind.CALL_EXPRESSION,
    NodeKind.ARRAY_INDEXED_ACCESS,
    NodeKind.ARRAY_LITERAL,
})

DIMENSION_KINDS = frozenset({NodeKind.DIMENSION, NodeKind.FIXED_DIMENSION})


class FormatError(Exception):
    """Base class for formatting errors."""
    pass


class DecodeError(FormatError):
    """Raised when the source slice of a node is not valid UTF-8."""
    def __init__(self, node: 'SyntaxNode', reason: UnicodeDecodeError):
        self.kind = node.kind
        self.row = node.start_row
        self.reason = reason
        super().__init__(f"Cannot decode {node.kind} on line {node.start_row + 1}: {reason}")


@dataclass(eq=False)
class SyntaxNode:
    """One element of a parsed source tree.

    Nodes share the encoded source of the whole file and only remember the
    byte span they cover, so decoding happens when a writer asks for text.
    """
    kind: str
    source: bytes = field(repr=False)
    start_byte: int
    end_byte: int
    start_row: int = 0
    end_row: int = 0
    children: List['SyntaxNode'] = field(default_factory=list, repr=False)
    parent: Optional['SyntaxNode'] = field(default=None, repr=False)

    @classmethod
    def leaf(cls, kind: str, text: Union[str, bytes], row: int = 0) -> 'SyntaxNode':
        """Build a standalone leaf, mostly useful for trees built by hand."""
        data = text.encode('utf-8') if isinstance(text, str) else text
        return cls(kind, data, 0, len(data), row, row + data.count(b'\n'))

    @classmethod
    def branch(cls, kind: str, children: List['SyntaxNode']) -> 'SyntaxNode':
        """Build a node over hand-built children.

        The children do not share a source, so the branch gets its own copy
        of their text joined by single spaces.
        """
        children = list(children)
        data = b' '.join(child.source[child.start_byte:child.end_byte] for child in children)
        start_row = children[0].start_row if children else 0
        end_row = children[-1].end_row if children else 0
        node = cls(kind, data, 0, len(data), start_row, end_row, children)
        for child in children:
            child.parent = node
        return node

    def text(self) -> str:
        try:
            return self.source[self.start_byte:self.end_byte].decode('utf-8')
        except UnicodeDecodeError as exc:
            raise DecodeError(self, exc) from exc

    def next_sibling(self) -> Optional['SyntaxNode']:
        if self.parent is None:
            return None
        siblings = self.parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[index + 1] if index + 1 < len(siblings) else None
        return None

    def to_dict(self) -> dict:
        out = {'type': self.kind, 'line': self.start_row + 1}
        if self.children:
            out['children'] = [child.to_dict() for child in self.children]
        else:
            out['text'] = self.source[self.start_byte:self.end_byte].decode('utf-8', 'backslashreplace')
        return out


def classify(node: SyntaxNode) -> NodeKind:
    """Map a node to its kind tag; tags outside the vocabulary are UNKNOWN."""
    return _KIND_BY_TAG.get(node.kind, NodeKind.UNKNOWN)


def next_sibling_kind(node: SyntaxNode) -> Optional[NodeKind]:
    sibling = node.next_sibling()
    if sibling is None:
        return None
    return classify(sibling)
