from pawnfmt.syntax import NodeKind, SyntaxNode, classify, next_sibling_kind
from pawnfmt.writer import Writer

# comments directly under these nodes stand on their own and the caller breaks after them
_STANDALONE_PARENTS = (NodeKind.SOURCE_FILE, NodeKind.BLOCK)


def write_comment(node: SyntaxNode, writer: Writer):
    """Write a comment verbatim.

    A comment embedded in a declaration is kept apart from its neighbours by a
    space, and a `//` comment there ends the line, continuing the declaration
    one indent level deeper.
    """
    text = node.text().rstrip()
    if node.parent is None or classify(node.parent) in _STANDALONE_PARENTS:
        writer.push(text)
        return

    if not (writer.ends_with(' ') or writer.ends_with('\n')):
        writer.push(' ')
    writer.push(text)
    if text.startswith('//'):
        writer.breakl()
        with writer.indent():
            writer.write_indent()
    elif next_sibling_kind(node) not in (NodeKind.COMMA, NodeKind.SEMICOLON, None):
        writer.push(' ')
