from pawnfmt.syntax import NodeKind, SyntaxNode, classify
from pawnfmt.writer import Writer


def insert_break(node: SyntaxNode, writer: Writer):
    """Close the line after a finished top-level item.

    A comment starting on the row where `node` ends stays on that line.
    Otherwise the line is broken, keeping up to `max_blank_lines` of the blank
    lines that separated the item from its successor in the source.
    """
    next_node = node.next_sibling()
    if next_node is None:
        writer.breakl()
        return
    next_kind = classify(next_node)
    if next_kind is NodeKind.COMMENT and next_node.start_row == node.end_row:
        writer.push(' ')
        return
    writer.breakl()
    if next_kind is NodeKind.RBRACE:
        return
    blank_lines = min(next_node.start_row - node.end_row - 1, writer.settings.max_blank_lines)
    for _ in range(blank_lines):
        writer.breakl()


def write_preproc_directive(node: SyntaxNode, writer: Writer):
    writer.push(node.text().rstrip())
