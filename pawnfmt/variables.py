"""Writers for variable declarations.

Two grammars declare variables: the modern one (`int x[5] = {...};`) and the
legacy one (`new Float:x = 1.0;`). They never mix within one construct, so
the external driver picks the entry point and with it the grammar:

- write_global_variable_declaration
- write_old_global_variable_declaration
- write_variable_declaration_statement
- write_old_variable_declaration_statement

All four share one assembler loop; a DeclarationGrammar supplies the parts
where the two grammars differ.
"""
from pawnfmt.comments import write_comment
from pawnfmt.expressions import (
    write_dimension, write_dynamic_array, write_expression, write_fixed_dimension, write_old_type
)
from pawnfmt.preproc import insert_break
from pawnfmt.syntax import DIMENSION_KINDS, NodeKind, SyntaxNode, classify, next_sibling_kind
from pawnfmt.writer import Writer


def write_type(node: SyntaxNode, writer: Writer):
    """Write a type token; a following dimension binds to it without a space."""
    next_kind = next_sibling_kind(node)
    writer.write_node(node)
    if next_kind not in DIMENSION_KINDS:
        writer.push(' ')


def write_variable_storage_class(node: SyntaxNode, writer: Writer):
    """Write `const`/`static` modifiers in source order, one space after each."""
    if not node.children:
        writer.write_node(node)
        writer.push(' ')
        return
    for child in node.children:
        writer.write_node(child)
        if classify(child) in (NodeKind.CONST, NodeKind.STATIC):
            writer.push(' ')


def write_variable_declaration(node: SyntaxNode, writer: Writer):
    """Write one modern declarator: symbol, dimensions and initializer."""
    for child in node.children:
        kind = classify(child)
        if kind is NodeKind.SYMBOL:
            writer.write_node(child)
        elif kind is NodeKind.FIXED_DIMENSION:
            write_fixed_dimension(child, writer, False)
        elif kind is NodeKind.DIMENSION:
            write_dimension(child, writer, False)
        elif kind is NodeKind.ASSIGN:
            writer.push(' = ')
        elif kind is NodeKind.DYNAMIC_ARRAY:
            write_dynamic_array(child, writer)
        elif writer.is_expression(kind):
            write_expression(child, writer)
        else:
            writer.unexpected(child, 'variable_declaration')


def write_old_variable_declaration(node: SyntaxNode, writer: Writer):
    """Write one legacy declarator: optional tag, symbol, dimensions and initializer."""
    for child in node.children:
        kind = classify(child)
        if kind is NodeKind.OLD_TYPE:
            write_old_type(child, writer)
        elif kind is NodeKind.DIMENSION:
            write_dimension(child, writer, False)
        elif kind is NodeKind.FIXED_DIMENSION:
            write_fixed_dimension(child, writer, False)
        elif kind is NodeKind.SYMBOL:
            writer.write_node(child)
        elif kind is NodeKind.ASSIGN:
            writer.push(' = ')
        elif writer.is_expression(kind):
            write_expression(child, writer)
        else:
            writer.unexpected(child, 'old_variable_declaration')


class DeclarationGrammar:
    """What one declaration grammar contributes to the shared assembler loop."""
    declarator: NodeKind

    def write_declarator(self, node: SyntaxNode, writer: Writer):
        raise NotImplementedError

    def write_head(self, node: SyntaxNode, kind: NodeKind, writer: Writer) -> bool:
        """Write a grammar specific prefix token. Returns False for other kinds."""
        raise NotImplementedError

    def end_global(self, node: SyntaxNode, writer: Writer):
        raise NotImplementedError

    def end_statement(self, writer: Writer, indent: bool):
        raise NotImplementedError


class ModernGrammar(DeclarationGrammar):
    declarator = NodeKind.VARIABLE_DECLARATION

    def write_declarator(self, node, writer):
        write_variable_declaration(node, writer)

    def write_head(self, node, kind, writer):
        if kind is NodeKind.TYPE:
            write_type(node, writer)
        elif kind is NodeKind.DIMENSION:
            write_dimension(node, writer, True)
        elif kind is NodeKind.FIXED_DIMENSION:
            write_fixed_dimension(node, writer, True)
        else:
            return False
        return True

    def end_global(self, node, writer):
        insert_break(node, writer)

    def end_statement(self, writer, indent):
        # the enclosing block decides how to break after a modern statement
        pass


class LegacyGrammar(DeclarationGrammar):
    declarator = NodeKind.OLD_VARIABLE_DECLARATION

    def write_declarator(self, node, writer):
        write_old_variable_declaration(node, writer)

    def write_head(self, node, kind, writer):
        if kind in (NodeKind.NEW, NodeKind.DECL):
            writer.write_node(node)
            writer.push(' ')
            return True
        return False

    def end_global(self, node, writer):
        writer.breakl()

    def end_statement(self, writer, indent):
        if indent:
            writer.breakl()


MODERN = ModernGrammar()
LEGACY = LegacyGrammar()


def _write_declaration_list(node: SyntaxNode, writer: Writer, grammar: DeclarationGrammar, statement: bool):
    for child in node.children:
        kind = classify(child)
        if kind is NodeKind.STORAGE_CLASS:
            write_variable_storage_class(child, writer)
        elif kind is NodeKind.VISIBILITY:
            writer.write_node(child)
            writer.push(' ')
        elif kind is NodeKind.COMMENT:
            write_comment(child, writer)
        elif kind is grammar.declarator:
            grammar.write_declarator(child, writer)
        elif kind is NodeKind.COMMA:
            writer.push(', ')
        elif kind is NodeKind.SEMICOLON:
            # a global declaration gets its terminator once, after the loop
            if statement:
                writer.push(';')
        elif grammar.write_head(child, kind, writer):
            continue
        else:
            writer.unexpected(child, node.kind)
            if statement:
                writer.write_node(child)


def _write_global(node: SyntaxNode, writer: Writer, grammar: DeclarationGrammar):
    _write_declaration_list(node, writer, grammar, statement=False)
    writer.push(';')
    grammar.end_global(node, writer)


def _write_statement(node: SyntaxNode, writer: Writer, indent: bool, grammar: DeclarationGrammar):
    if indent:
        writer.write_indent()
    _write_declaration_list(node, writer, grammar, statement=True)
    if indent and not writer.ends_with(';'):
        writer.push(';')
    grammar.end_statement(writer, indent)


def write_global_variable_declaration(node: SyntaxNode, writer: Writer):
    _write_global(node, writer, MODERN)


def write_old_global_variable_declaration(node: SyntaxNode, writer: Writer):
    _write_global(node, writer, LEGACY)


def write_variable_declaration_statement(node: SyntaxNode, writer: Writer, indent: bool):
    """Write a block-scoped modern declaration.

    With `indent` the statement starts at the current indentation and is
    guaranteed to end with exactly one `;`. Without it the caller owns both
    the indentation and the terminator, as in a `for` initializer.
    """
    _write_statement(node, writer, indent, MODERN)


def write_old_variable_declaration_statement(node: SyntaxNode, writer: Writer, indent: bool):
    _write_statement(node, writer, indent, LEGACY)
