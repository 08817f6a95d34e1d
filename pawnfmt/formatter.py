from typing import List, Optional, Tuple

from pawnfmt.comments import write_comment
from pawnfmt.parser import Parser
from pawnfmt.preproc import insert_break, write_preproc_directive
from pawnfmt.syntax import FormatError, NodeKind, SyntaxNode, classify
from pawnfmt.variables import (
    write_global_variable_declaration,
    write_old_global_variable_declaration,
    write_old_variable_declaration_statement,
    write_type,
    write_variable_declaration_statement,
)
from pawnfmt.writer import Settings, Writer


class Formatter:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.diagnostics: List[FormatError] = []

    def format_block(self, node: SyntaxNode, writer: Writer):
        writer.push('{')
        writer.breakl()
        with writer.indent():
            for child in node.children:
                kind = classify(child)
                if kind in (NodeKind.LBRACE, NodeKind.RBRACE):
                    continue
                elif kind is NodeKind.VARIABLE_DECLARATION_STATEMENT:
                    write_variable_declaration_statement(child, writer, True)
                    insert_break(child, writer)
                elif kind is NodeKind.OLD_VARIABLE_DECLARATION_STATEMENT:
                    write_old_variable_declaration_statement(child, writer, True)
                elif kind is NodeKind.COMMENT:
                    # a trailing comment keeps to the line of its statement
                    if writer.ends_with('\n'):
                        writer.write_indent()
                    write_comment(child, writer)
                    insert_break(child, writer)
                else:
                    writer.unexpected(child, 'block')
        writer.write_indent()
        writer.push('}')

    def format_function_definition(self, node: SyntaxNode, writer: Writer):
        """Format `type name()` followed by its block on the next line."""
        for child in node.children:
            kind = classify(child)
            if kind is NodeKind.FUNCTION_VISIBILITY:
                writer.write_node(child)
                writer.push(' ')
            elif kind is NodeKind.TYPE:
                write_type(child, writer)
            elif kind in (NodeKind.SYMBOL, NodeKind.LPAREN, NodeKind.RPAREN):
                writer.write_node(child)
            elif kind is NodeKind.BLOCK:
                writer.breakl()
                self.format_block(child, writer)
            else:
                writer.unexpected(child, 'function_definition')

    def format_source_file(self, node: SyntaxNode, writer: Writer):
        for child in node.children:
            kind = classify(child)
            if kind is NodeKind.GLOBAL_VARIABLE_DECLARATION:
                write_global_variable_declaration(child, writer)
            elif kind is NodeKind.OLD_GLOBAL_VARIABLE_DECLARATION:
                write_old_global_variable_declaration(child, writer)
            elif kind is NodeKind.FUNCTION_DEFINITION:
                self.format_function_definition(child, writer)
                insert_break(child, writer)
            elif kind is NodeKind.COMMENT:
                write_comment(child, writer)
                insert_break(child, writer)
            elif kind is NodeKind.PREPROC_DIRECTIVE:
                write_preproc_directive(child, writer)
                insert_break(child, writer)
            else:
                writer.unexpected(child, 'source_file')

    def format(self, tree: SyntaxNode) -> str:
        """Format a parsed source file. Diagnostics are left in `self.diagnostics`."""
        writer = Writer(self.settings)
        self.diagnostics = writer.diagnostics
        self.format_source_file(tree, writer)
        return writer.getvalue()

    def format_source(self, text) -> str:
        return self.format(Parser().parse_program(text))


def format_source(text, settings: Optional[Settings] = None) -> Tuple[str, List[FormatError]]:
    """Convenience function to format source text."""
    formatter = Formatter(settings)
    output = formatter.format_source(text)
    return output, formatter.diagnostics
