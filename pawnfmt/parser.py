from bisect import bisect_left
from itertools import accumulate

from pyparsing import *

from pawnfmt.syntax import SyntaxNode

RESERVED = ('new', 'decl', 'static', 'const', 'public', 'stock', 'true', 'false', 'null')
NAME = r'(?!(?:' + '|'.join(RESERVED) + r')\b)[A-Za-z_][A-Za-z0-9_]*'

# binary operators, loosest binding last
BINARY_OPERATORS = (
    r'[*/%](?![=/*])',
    r'[+-](?![+=-])',
    r'<<(?!=)|>>>(?!=)|>>(?!=)',
    r'<=|>=|<(?![<=])|>(?![>=])',
    r'==|!=',
    r'&(?![&=])',
    r'\^(?!=)',
    r'\|(?![|=])',
    r'&&',
    r'\|\|',
)


class Parser:
    def __init__(self):
        self.text = ""
        self.source = b""
        self._byte_offsets = [0]
        self._newlines = []

    def get_line(self, pos) -> int:
        return bisect_left(self._newlines, pos)

    def _load(self, text):
        if isinstance(text, bytes):
            self.source = text
            self.text = text.decode('utf-8', 'surrogateescape')
        else:
            self.text = text
            self.source = text.encode('utf-8', 'surrogateescape')
        widths = (len(ch.encode('utf-8', 'surrogateescape')) for ch in self.text)
        self._byte_offsets = [0] + list(accumulate(widths))
        self._newlines = [i for i, ch in enumerate(self.text) if ch == '\n']

    def make_leaf(self, kind, loc, string):
        end = loc + len(string)
        return SyntaxNode(
            kind, self.source, self._byte_offsets[loc], self._byte_offsets[end],
            self.get_line(loc), self.get_line(end)
        )

    def make_branch(self, kind, children):
        first, last = children[0], children[-1]
        node = SyntaxNode(
            kind, self.source, first.start_byte, last.end_byte,
            first.start_row, last.end_row, children
        )
        for child in children:
            child.parent = node
        return node

    def leaf(self, kind):
        def action(s, loc, tokens):
            return self.make_leaf(kind, loc, tokens[0])
        return action

    def branch(self, kind):
        def action(s, loc, tokens):
            return self.make_branch(kind, list(tokens))
        return action

    def token(self, expr, kind):
        return expr.set_parse_action(self.leaf(kind))

    def fold_binary(self, tokens):
        nodes = list(tokens)
        result = nodes[0]
        for i in range(1, len(nodes), 2):
            result = self.make_branch('binary_expression', [result, nodes[i], nodes[i + 1]])
        return result

    def fold_index(self, tokens):
        nodes = list(tokens)
        result = nodes[0]
        for i in range(1, len(nodes), 3):
            result = self.make_branch('array_indexed_access', [result] + nodes[i:i + 3])
        return result

    def enrich_source_file(self, tokens):
        children = list(tokens)
        node = SyntaxNode(
            'source_file', self.source, 0, len(self.source),
            0, self.get_line(len(self.text)), children
        )
        for child in children:
            child.parent = node
        return node

    def build_expression(self, symbol, LPAR, RPAR, LBRACK, RBRACK, LBRACE, RBRACE, COMMA):
        expr = Forward()
        literal = (
            self.token(Regex(r'\d[\d_]*\.\d[\d_]*(?:[eE][+-]?\d+)?'), 'float_literal')
            | self.token(Regex(r'0[xX][0-9A-Fa-f_]+|0[bB][01_]+|0[oO][0-7_]+|\d[\d_]*'), 'int_literal')
            | self.token(Regex(r"'(?:[^'\\\n]|\\.)*'"), 'char_literal')
            | self.token(Regex(r'"(?:[^"\\\n]|\\.)*"'), 'string_literal')
            | self.token(Regex(r'(?:true|false)\b'), 'bool_literal')
            | self.token(Regex(r'null\b'), 'null')
        )
        item_list = Optional(expr + ZeroOrMore(COMMA + expr))
        call = (symbol + LPAR + item_list + RPAR).set_parse_action(self.branch('call_expression'))
        parenthesized = (LPAR + expr + RPAR).set_parse_action(self.branch('parenthesized_expression'))
        array_literal = (LBRACE + item_list + RBRACE).set_parse_action(self.branch('array_literal'))
        primary = literal | call | symbol | parenthesized | array_literal
        postfix = (primary + ZeroOrMore(LBRACK + expr + RBRACK)).set_parse_action(self.fold_index)
        unary = Forward()
        unary_op = self.token(Regex(r'-(?!-)|!(?!=)|~'), 'operator')
        unary <<= (unary_op + unary).set_parse_action(self.branch('unary_expression')) | postfix
        operand = unary
        for pattern in BINARY_OPERATORS:
            op = self.token(Regex(pattern), 'operator')
            operand = (operand + ZeroOrMore(op + operand)).set_parse_action(self.fold_binary)
        expr <<= operand
        return expr

    def parse_program(self, text) -> SyntaxNode:
        self._load(text)

        SEMI = self.token(Literal(';'), ';')
        COMMA = self.token(Literal(','), ',')
        ASSIGN = self.token(Regex(r'=(?!=)'), '=')
        COLON = self.token(Regex(r':(?!:)'), ':')
        LBRACK, RBRACK, LPAR, RPAR, LBRACE, RBRACE = [self.token(Literal(c), c) for c in "[](){}"]
        NEW = self.token(Keyword('new'), 'new')
        DECL = self.token(Keyword('decl'), 'decl')
        STATIC = self.token(Keyword('static'), 'static')
        CONST = self.token(Keyword('const'), 'const')

        comment = self.token(Regex(r'//[^\n]*|/\*[\s\S]*?\*/'), 'comment')
        preproc = self.token(Regex(r'#[^\n]*'), 'preproc_directive')
        symbol = self.token(Regex(NAME), 'symbol')
        type_ = self.token(Regex(NAME), 'type')
        visibility = self.token(Regex(r'(?:public|stock)\b'), 'variable_visibility')
        function_visibility = self.token(Regex(r'(?:public|stock|static)\b'), 'function_visibility')

        expr = self.build_expression(symbol, LPAR, RPAR, LBRACK, RBRACK, LBRACE, RBRACE, COMMA)

        comments = ZeroOrMore(comment)
        dimension = (LBRACK + RBRACK).set_parse_action(self.branch('dimension'))
        fixed_dimension = (LBRACK + expr + RBRACK).set_parse_action(self.branch('fixed_dimension'))
        dims = ZeroOrMore(dimension | fixed_dimension)
        dynamic_array = (NEW + type_ + OneOrMore(fixed_dimension)).set_parse_action(self.branch('dynamic_array'))
        storage_class = OneOrMore(STATIC | CONST).set_parse_action(self.branch('variable_storage_class'))

        variable_declaration = (symbol + dims + Optional(ASSIGN + (dynamic_array | expr)))
        variable_declaration.set_parse_action(self.branch('variable_declaration'))
        old_type = (self.token(Regex(NAME), 'symbol') + COLON).set_parse_action(self.branch('old_type'))
        old_variable_declaration = (Optional(old_type) + symbol + dims + Optional(ASSIGN + expr))
        old_variable_declaration.set_parse_action(self.branch('old_variable_declaration'))

        def declarators(declarator):
            return declarator + comments + ZeroOrMore(COMMA + comments + declarator + comments)

        modern_head = type_ + dims + comments
        global_declaration = (
            ZeroOrMore(visibility | storage_class) + modern_head + declarators(variable_declaration) + SEMI
        ).set_parse_action(self.branch('global_variable_declaration'))
        old_global_declaration = (
            OneOrMore(visibility | storage_class | NEW | DECL) + comments
            + declarators(old_variable_declaration) + SEMI
        ).set_parse_action(self.branch('old_global_variable_declaration'))
        declaration_statement = (
            Optional(storage_class) + modern_head + declarators(variable_declaration) + SEMI
        ).set_parse_action(self.branch('variable_declaration_statement'))
        old_declaration_statement = (
            OneOrMore(storage_class | NEW | DECL) + comments
            + declarators(old_variable_declaration) + SEMI
        ).set_parse_action(self.branch('old_variable_declaration_statement'))

        block = (
            LBRACE + ZeroOrMore(comment | declaration_statement | old_declaration_statement) + RBRACE
        ).set_parse_action(self.branch('block'))
        function_definition = (
            Optional(function_visibility) + type_ + symbol + LPAR + RPAR + block
        ).set_parse_action(self.branch('function_definition'))

        source_file = ZeroOrMore(
            preproc | comment | function_definition | global_declaration | old_global_declaration
        ) + StringEnd()
        source_file.set_parse_action(self.enrich_source_file)
        source_file.parse_with_tabs()
        return source_file.parse_string(self.text, parse_all=True)[0]


def parse_program(text) -> SyntaxNode:
    """Convenience function to parse a program."""
    return Parser().parse_program(text)
