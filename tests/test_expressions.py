import unittest

from pawnfmt.expressions import write_expression
from pawnfmt.formatter import format_source
from pawnfmt.syntax import SyntaxNode
from pawnfmt.writer import Writer


class TestExpressions(unittest.TestCase):
    def _expression_test(self, code, expected):
        output, diagnostics = format_source(f"int x = {code};")
        self.assertEqual(output, f"int x = {expected};\n")
        self.assertEqual(diagnostics, [])

    def test_binary(self):
        self._expression_test("a+b*2", "a + b * 2")
        self._expression_test("a-b", "a - b")
        self._expression_test("a<<2|b&c", "a << 2 | b & c")
        self._expression_test("x==1&&y!=2||z", "x == 1 && y != 2 || z")

    def test_unary(self):
        self._expression_test("-1", "-1")
        self._expression_test("!done", "!done")
        self._expression_test("~mask", "~mask")
        self._expression_test("a - -b", "a - -b")

    def test_parenthesized(self):
        self._expression_test("( a+b )*2", "(a + b) * 2")

    def test_call(self):
        self._expression_test("f(1,2 ,3)", "f(1, 2, 3)")
        self._expression_test("f( )", "f()")
        self._expression_test("max(a, f(b))", "max(a, f(b))")

    def test_indexing(self):
        self._expression_test("arr[ i+1 ][2]", "arr[i + 1][2]")

    def test_array_literal(self):
        self._expression_test("{1,2,3}", "{1, 2, 3}")
        self._expression_test("{ }", "{}")

    def test_literals(self):
        for code in ("'a'", '"hi"', "true", "null", "0x1F", "1.5e3", "0b101"):
            with self.subTest(code=code):
                self._expression_test(code, code)

    def test_unexpected_kind(self):
        writer = Writer()
        with self.assertLogs('pawnfmt', level='WARNING'):
            write_expression(SyntaxNode.leaf('mystery', '?'), writer)
        self.assertEqual(writer.getvalue(), "")
        self.assertEqual(writer.diagnostics[0].context, 'expression')


if __name__ == "__main__":
    unittest.main()
