from pawnfmt.syntax import DIMENSION_KINDS, LITERAL_KINDS, NodeKind, SyntaxNode, classify, next_sibling_kind
from pawnfmt.writer import Writer

_BRACKETS = (NodeKind.LBRACKET, NodeKind.RBRACKET)


def write_expression(node: SyntaxNode, writer: Writer):
    """Write an expression with canonical spacing and no surrounding whitespace."""
    kind = classify(node)
    if kind in LITERAL_KINDS or kind is NodeKind.SYMBOL:
        writer.write_node(node)
    elif kind is NodeKind.BINARY_EXPRESSION:
        left, op, right = node.children
        write_expression(left, writer)
        writer.push(f" {op.text()} ")
        write_expression(right, writer)
    elif kind is NodeKind.UNARY_EXPRESSION:
        op, operand = node.children
        writer.write_node(op)
        write_expression(operand, writer)
    elif kind is NodeKind.PARENTHESIZED_EXPRESSION:
        writer.push('(')
        write_expression(node.children[1], writer)
        writer.push(')')
    elif kind is NodeKind.CALL_EXPRESSION:
        write_expression(node.children[0], writer)
        writer.push('(')
        _write_items(node.children[2:-1], writer, 'call_expression')
        writer.push(')')
    elif kind is NodeKind.ARRAY_INDEXED_ACCESS:
        array, _, index, _ = node.children
        write_expression(array, writer)
        writer.push('[')
        write_expression(index, writer)
        writer.push(']')
    elif kind is NodeKind.ARRAY_LITERAL:
        writer.push('{')
        _write_items(node.children[1:-1], writer, 'array_literal')
        writer.push('}')
    else:
        writer.unexpected(node, 'expression')


def _write_items(items, writer: Writer, context: str):
    for item in items:
        kind = classify(item)
        if kind is NodeKind.COMMA:
            writer.push(', ')
        elif writer.is_expression(kind):
            write_expression(item, writer)
        else:
            writer.unexpected(item, context)


def write_old_type(node: SyntaxNode, writer: Writer):
    # a tag such as `Float:`, written without inner whitespace
    if not node.children:
        writer.push(''.join(node.text().split()))
        return
    for child in node.children:
        writer.write_node(child)


def write_dimension(node: SyntaxNode, writer: Writer, inline: bool):
    writer.push('[]')
    _space_after_inline(node, writer, inline)


def write_fixed_dimension(node: SyntaxNode, writer: Writer, inline: bool):
    writer.push('[')
    for child in node.children:
        kind = classify(child)
        if kind in _BRACKETS:
            continue
        elif writer.is_expression(kind):
            write_expression(child, writer)
        else:
            writer.unexpected(child, 'fixed_dimension')
    writer.push(']')
    _space_after_inline(node, writer, inline)


def _space_after_inline(node: SyntaxNode, writer: Writer, inline: bool):
    # an inline dimension sits between the type and the declarator
    if inline and next_sibling_kind(node) not in DIMENSION_KINDS:
        writer.push(' ')


def write_dynamic_array(node: SyntaxNode, writer: Writer):
    """Write `new type[size]...`."""
    for child in node.children:
        kind = classify(child)
        if kind is NodeKind.NEW:
            writer.write_node(child)
            writer.push(' ')
        elif kind is NodeKind.TYPE:
            writer.write_node(child)
        elif kind is NodeKind.FIXED_DIMENSION:
            write_fixed_dimension(child, writer, False)
        elif kind is NodeKind.DIMENSION:
            write_dimension(child, writer, False)
        else:
            writer.unexpected(child, 'dynamic_array')
