import unittest

from pawnfmt.formatter import Formatter, format_source
from pawnfmt.syntax import DecodeError
from pawnfmt.writer import Settings


SOURCE = (
    "#include <sourcemod>\n"
    "#pragma semicolon 1\n"
    "\n"
    "// globals\n"
    "public const int MAX=10;\n"
    "static const int a,b[10];   // trailing\n"
    "new Float:g_x=1.0,g_y;\n"
    "int[] data = new int[MAX];\n"
    "\n"
    "\n"
    "void main()\n"
    "{\n"
    "  int x=5;\n"
    "  new y = x+1;\n"
    "  // note\n"
    "  float z;\n"
    "}\n"
)

EXPECTED = """#include <sourcemod>
#pragma semicolon 1

// globals
public const int MAX = 10;
static const int a, b[10]; // trailing
new Float:g_x = 1.0, g_y;
int[] data = new int[MAX];

void main()
{
    int x = 5;
    new y = x + 1;
    // note
    float z;
}
"""


class TestFormatter(unittest.TestCase):
    def _roundtrip_test(self, code, settings=None):
        """Formatted code formats to itself"""
        output, diagnostics = format_source(code, settings)
        self.assertEqual(diagnostics, [])
        self.assertEqual(output, code)

    def test_source_file(self):
        output, diagnostics = format_source(SOURCE)
        self.assertEqual(output, EXPECTED)
        self.assertEqual(diagnostics, [])

    def test_fixed_point(self):
        self._roundtrip_test(EXPECTED)

    def test_trailing_comments(self):
        code = """void f()
{
    int x; // c
    new y;
    // d
}
"""
        self._roundtrip_test(code)
        output, _ = format_source("void f()\n{\n    int x; // c\n    new y; // d\n}\n")
        self.assertEqual(output, code)

    def test_global_trailing_comments(self):
        self.assertEqual(format_source("int x;   // note")[0], "int x; // note\n")
        self.assertEqual(format_source("new x; // note")[0], "new x;\n// note\n")

    def test_continued_declaration(self):
        self._roundtrip_test("void f()\n{\n    int a, // first\n        b;\n}\n")
        self._roundtrip_test("int a, // first\n    b;\n")

    def test_function_visibility(self):
        self._roundtrip_test("public void OnPluginStart()\n{\n}\n")
        output, _ = format_source("stock   int  helper( )  {  }")
        self.assertEqual(output, "stock int helper()\n{\n}\n")

    def test_blank_lines(self):
        code = "int a;\n\n\n\nint b;"
        self.assertEqual(format_source(code)[0], "int a;\n\nint b;\n")
        self.assertEqual(format_source(code, Settings(max_blank_lines=0))[0], "int a;\nint b;\n")
        self.assertEqual(format_source(code, Settings(max_blank_lines=3))[0], "int a;\n\n\n\nint b;\n")

    def test_no_blank_line_before_closing_brace(self):
        output, _ = format_source("void f()\n{\n    int x;\n\n\n}\n")
        self.assertEqual(output, "void f()\n{\n    int x;\n}\n")

    def test_indent_settings(self):
        code = "void f()\n{\nint x;\n}\n"
        self.assertEqual(format_source(code, Settings(use_tabs=True))[0], "void f()\n{\n\tint x;\n}\n")
        self.assertEqual(format_source(code, Settings(indent_size=2))[0], "void f()\n{\n  int x;\n}\n")

    def test_empty_source(self):
        self._roundtrip_test("")

    def test_decode_error(self):
        with self.assertRaises(DecodeError):
            Formatter().format_source(b"int x; // \xff\n")

    def test_diagnostics_reset(self):
        formatter = Formatter()
        formatter.format_source("int x;")
        self.assertEqual(formatter.diagnostics, [])


if __name__ == "__main__":
    unittest.main()
