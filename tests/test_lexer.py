"""
Test suite for the Mython lexer engine.

Tests cover:
- Keyword, identifier, number, string and operator tokens
- Indentation tracking (Indent/Dedent tokens)
- Blank lines, comments and end of input
- Expect helpers and their diagnostics
- Source locations and convenience functions

Author: xwest
"""

import io
import os
import sys
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mython.lexer import (
    Lexer, Token, TokenType, KEYWORDS, DUAL_SYMBOLS, LexerConfig, CharStream,
    LexerError, UnterminatedStringError, NumberOverflowError, TokenMismatchError,
    tokenize_string, tokenize_file, format_tokens
)


NEWLINE = Token(TokenType.NEWLINE)
INDENT = Token(TokenType.INDENT)
DEDENT = Token(TokenType.DEDENT)
EOF = Token(TokenType.EOF)


def number(value):
    return Token(TokenType.NUMBER, value)


def ident(name):
    return Token(TokenType.ID, name)


def char(value):
    return Token(TokenType.CHAR, value)


def string(value):
    return Token(TokenType.STRING, value)


class TestSignificantTokens(unittest.TestCase):
    """Tokens that come from actual characters in the source."""

    def test_keywords(self):
        for text, keyword in KEYWORDS.items():
            with self.subTest(keyword=text):
                self.assertEqual(tokenize_string(text), [keyword, NEWLINE, EOF])

    def test_identifiers_that_look_like_keywords(self):
        for text in ["If", "classy", "none", "true", "printx", "_def", "return1"]:
            with self.subTest(identifier=text):
                self.assertEqual(tokenize_string(text), [ident(text), NEWLINE, EOF])

    def test_identifiers(self):
        tokens = tokenize_string("x _private snake_case CamelCase a1b2")
        self.assertEqual(tokens, [
            ident("x"), ident("_private"), ident("snake_case"),
            ident("CamelCase"), ident("a1b2"), NEWLINE, EOF
        ])

    def test_numbers(self):
        tokens = tokenize_string("0 42 007 2147483647")
        self.assertEqual(tokens, [
            number(0), number(42), number(7), number(2147483647), NEWLINE, EOF
        ])

    def test_number_followed_by_name(self):
        self.assertEqual(tokenize_string("12abc"), [number(12), ident("abc"), NEWLINE, EOF])

    def test_dual_symbols(self):
        for text, operator in DUAL_SYMBOLS.items():
            with self.subTest(operator=text):
                self.assertEqual(tokenize_string(f"a {text} b"), [
                    ident("a"), operator, ident("b"), NEWLINE, EOF
                ])

    def test_dual_symbol_prefix_alone(self):
        for text in DUAL_SYMBOLS:
            first = text[0]
            with self.subTest(operator=text):
                self.assertEqual(tokenize_string(f"{first}x"), [char(first), ident("x"), NEWLINE, EOF])
                self.assertEqual(tokenize_string(f"{first} {first}"), [char(first), char(first), NEWLINE, EOF])

    def test_dual_symbol_prefix_at_end_of_input(self):
        self.assertEqual(tokenize_string("<"), [char("<"), NEWLINE, EOF])

    def test_dual_symbol_is_greedy(self):
        self.assertEqual(tokenize_string("==="), [Token(TokenType.EQ), char("="), NEWLINE, EOF])

    def test_single_chars(self):
        tokens = tokenize_string("x = (a + b) * c.d, -1")
        self.assertEqual(tokens, [
            ident("x"), char("="), char("("), ident("a"), char("+"), ident("b"),
            char(")"), char("*"), ident("c"), char("."), ident("d"), char(","),
            char("-"), number(1), NEWLINE, EOF
        ])

    def test_unclassified_characters_become_single_chars(self):
        tokens = tokenize_string("$ ? \u00e9")
        self.assertEqual(tokens, [char("$"), char("?"), char("\u00e9"), NEWLINE, EOF])

    def test_strings(self):
        tokens = tokenize_string("print 'hello', \"world\"")
        self.assertEqual(tokens, [
            Token(TokenType.PRINT), string("hello"), char(","), string("world"), NEWLINE, EOF
        ])

    def test_string_with_escaped_newline(self):
        self.assertEqual(tokenize_string('"a\\nb"'), [string("a\nb"), NEWLINE, EOF])

    def test_string_with_escaped_backslash(self):
        tokens = tokenize_string(r"'a\\b'")
        self.assertEqual(tokens, [string("a\\b"), NEWLINE, EOF])
        self.assertEqual(len(tokens[0].value), 3)

    def test_string_keeps_other_quote_kind(self):
        self.assertEqual(tokenize_string("\"it's\""), [string("it's"), NEWLINE, EOF])

    def test_empty_string(self):
        self.assertEqual(tokenize_string("''"), [string(""), NEWLINE, EOF])

    def test_unterminated_string(self):
        with self.assertRaises(UnterminatedStringError) as ctx:
            tokenize_string('x = "abc')
        self.assertEqual(ctx.exception.code, "L002")
        self.assertEqual(ctx.exception.partial, "abc")
        self.assertEqual(ctx.exception.location.column, 5)

    def test_number_overflow(self):
        with self.assertRaises(NumberOverflowError) as ctx:
            tokenize_string("x = 2147483648")
        self.assertEqual(ctx.exception.code, "L007")
        self.assertIsInstance(ctx.exception, LexerError)


class TestIndentation(unittest.TestCase):
    """Indent/Dedent generation and line handling."""

    def test_if_block(self):
        tokens = tokenize_string("if x == 1:\n  print x\n")
        self.assertEqual(format_tokens(tokens),
                         "If Identifier{x} Eq Number{1} SingleChar{:} Newline "
                         "Indent Print Identifier{x} Newline Dedent Eof")

    def test_dedent_to_intermediate_level(self):
        tokens = tokenize_string("a\n      b\n  c\nd")
        self.assertEqual(tokens, [
            ident("a"), NEWLINE,
            INDENT, INDENT, INDENT, ident("b"), NEWLINE,
            DEDENT, DEDENT, ident("c"), NEWLINE,
            DEDENT, ident("d"), NEWLINE,
            EOF
        ])

    def test_two_levels_in_and_out(self):
        tokens = tokenize_string("a\n    b\nc\n")
        self.assertEqual(tokens, [
            ident("a"), NEWLINE,
            INDENT, INDENT, ident("b"), NEWLINE,
            DEDENT, DEDENT, ident("c"), NEWLINE,
            EOF
        ])

    def test_nested_blocks(self):
        source = (
            "class A:\n"
            "  def f():\n"
            "    return 1\n"
            "  def g():\n"
            "    return 2\n"
            "x = A()\n"
        )
        tokens = tokenize_string(source)
        self.assertEqual(format_tokens(tokens), " ".join([
            "Class Identifier{A} SingleChar{:} Newline",
            "Indent Def Identifier{f} SingleChar{(} SingleChar{)} SingleChar{:} Newline",
            "Indent Return Number{1} Newline",
            "Dedent Def Identifier{g} SingleChar{(} SingleChar{)} SingleChar{:} Newline",
            "Indent Return Number{2} Newline",
            "Dedent Dedent Identifier{x} SingleChar{=} Identifier{A} SingleChar{(} SingleChar{)} Newline",
            "Eof",
        ]))

    def test_dedents_at_end_of_input(self):
        tokens = tokenize_string("a:\n  b:\n    c:\n      d\n")
        self.assertEqual(tokens[-4:], [DEDENT, DEDENT, DEDENT, EOF])

    def test_missing_final_newline(self):
        self.assertEqual(tokenize_string("x"), [ident("x"), NEWLINE, EOF])

    def test_missing_final_newline_in_block(self):
        tokens = tokenize_string("if a:\n  b")
        self.assertEqual(tokens, [
            Token(TokenType.IF), ident("a"), char(":"), NEWLINE,
            INDENT, ident("b"), NEWLINE, DEDENT, EOF
        ])

    def test_blank_and_comment_lines_produce_nothing(self):
        source = "x\n\n   \n# comment\n  # indented comment\n\ny\n"
        self.assertEqual(tokenize_string(source), [ident("x"), NEWLINE, ident("y"), NEWLINE, EOF])

    def test_blank_line_inside_block(self):
        tokens = tokenize_string("if a:\n  b\n\n  c\n")
        self.assertEqual(tokens, [
            Token(TokenType.IF), ident("a"), char(":"), NEWLINE,
            INDENT, ident("b"), NEWLINE, ident("c"), NEWLINE, DEDENT, EOF
        ])

    def test_spaces_only_line_before_content(self):
        self.assertEqual(tokenize_string("   \nx\n"), [ident("x"), NEWLINE, EOF])

    def test_trailing_comment(self):
        self.assertEqual(tokenize_string("x # note\ny"), [
            ident("x"), NEWLINE, ident("y"), NEWLINE, EOF
        ])

    def test_comment_at_end_of_input(self):
        self.assertEqual(tokenize_string("x\n# done"), [ident("x"), NEWLINE, EOF])

    def test_empty_input(self):
        self.assertEqual(tokenize_string(""), [EOF])
        self.assertEqual(tokenize_string("\n\n  \n"), [EOF])

    def test_spaces_inside_line_do_not_indent(self):
        self.assertEqual(tokenize_string("a      b\n"), [ident("a"), ident("b"), NEWLINE, EOF])

    def test_one_level_per_advance(self):
        lexer = Lexer("a\n      b\n")
        self.assertEqual(lexer.current_token(), ident("a"))
        self.assertEqual(lexer.next_token(), NEWLINE)
        for depth in (1, 2, 3):
            self.assertEqual(lexer.next_token(), INDENT)
            self.assertEqual(lexer.current_indent, depth)
        self.assertEqual(lexer.next_token(), ident("b"))

    def test_custom_indent_width(self):
        config = LexerConfig(indent_width=4)
        tokens = tokenize_string("a:\n    b\n", config=config)
        self.assertEqual(tokens, [ident("a"), char(":"), NEWLINE, INDENT, ident("b"), NEWLINE, DEDENT, EOF])


class TestLexerInterface(unittest.TestCase):
    """current_token/next_token and the expect family."""

    def test_first_token_ready_after_construction(self):
        lexer = Lexer("print 1")
        self.assertEqual(lexer.current_token(), Token(TokenType.PRINT))
        self.assertEqual(lexer.current_token(), Token(TokenType.PRINT))

    def test_eof_is_sticky(self):
        lexer = Lexer("")
        self.assertEqual(lexer.current_token(), EOF)
        self.assertEqual(lexer.next_token(), EOF)
        self.assertEqual(lexer.next_token(), EOF)

    def test_expect_sequence(self):
        lexer = Lexer("class Foo:\n  x = 'bar'\n")
        self.assertIsNone(lexer.expect(TokenType.CLASS))
        self.assertEqual(lexer.expect_next(TokenType.ID), "Foo")
        lexer.expect_next_value(TokenType.CHAR, ":")
        lexer.expect_next(TokenType.NEWLINE)
        lexer.expect_next(TokenType.INDENT)
        lexer.expect_next_value(TokenType.ID, "x")
        lexer.expect_next_value(TokenType.CHAR, "=")
        self.assertEqual(lexer.expect_next(TokenType.STRING), "bar")
        lexer.expect_next(TokenType.NEWLINE)
        lexer.expect_next(TokenType.DEDENT)
        lexer.expect_next(TokenType.EOF)

    def test_expect_wrong_type(self):
        lexer = Lexer("x")
        with self.assertRaises(TokenMismatchError) as ctx:
            lexer.expect(TokenType.NUMBER)
        error = ctx.exception
        self.assertEqual(error.expected_type, TokenType.NUMBER)
        self.assertEqual(error.actual, ident("x"))
        self.assertEqual(error.code, "L011")
        self.assertIn("Expected Number, got Identifier{x}", str(error))

    def test_expect_wrong_value(self):
        lexer = Lexer("x")
        with self.assertRaises(TokenMismatchError) as ctx:
            lexer.expect_value(TokenType.ID, "y")
        self.assertIn("Expected Identifier{y}, got Identifier{x}", str(ctx.exception))

    def test_expect_value_wrong_type(self):
        lexer = Lexer("1")
        with self.assertRaises(TokenMismatchError):
            lexer.expect_value(TokenType.ID, 1)

    def test_expect_value_rejects_bool_for_number(self):
        lexer = Lexer("1")
        with self.assertRaises(TokenMismatchError):
            lexer.expect_value(TokenType.NUMBER, True)
        lexer.expect_value(TokenType.NUMBER, 1)

    def test_expect_next_advances_before_checking(self):
        lexer = Lexer("a b")
        with self.assertRaises(TokenMismatchError):
            lexer.expect_next(TokenType.NUMBER)
        self.assertEqual(lexer.current_token(), ident("b"))

    def test_mismatch_suggests_keyword(self):
        lexer = Lexer("retrun x")
        with self.assertRaises(TokenMismatchError) as ctx:
            lexer.expect(TokenType.RETURN)
        self.assertEqual(ctx.exception.diagnostic.suggestions, ["return"])

    def test_mismatch_without_suggestion(self):
        lexer = Lexer("banana")
        with self.assertRaises(TokenMismatchError) as ctx:
            lexer.expect(TokenType.RETURN)
        self.assertIsNone(ctx.exception.diagnostic.suggestions)

    def test_iteration_stops_after_eof(self):
        lexer = Lexer("a\n")
        self.assertEqual(list(lexer), [ident("a"), NEWLINE, EOF])
        self.assertEqual(list(lexer), [EOF])

    def test_accepts_text_file(self):
        lexer = Lexer(io.StringIO("x = 1\n"))
        self.assertEqual(lexer.tokenize(), [ident("x"), char("="), number(1), NEWLINE, EOF])

    def test_accepts_char_stream(self):
        stream = CharStream("True", "inline.my")
        lexer = Lexer(stream)
        self.assertEqual(lexer.current_token(), Token(TokenType.TRUE))
        self.assertEqual(lexer.current_token().location.filename, "inline.my")


class TestLocations(unittest.TestCase):
    """Source locations attached to tokens."""

    def test_token_locations(self):
        tokens = tokenize_string("x\n  yy", filename="demo.my")
        x, newline, indent, yy = tokens[:4]
        self.assertEqual((x.location.line, x.location.column, x.location.offset), (1, 1, 0))
        self.assertEqual((newline.location.line, newline.location.column), (1, 2))
        self.assertEqual((indent.location.line, indent.location.column), (2, 3))
        self.assertEqual((yy.location.line, yy.location.column, yy.location.offset), (2, 3, 4))
        self.assertEqual(str(yy.location), "demo.my:2:3")

    def test_error_location_uses_filename(self):
        with self.assertRaises(UnterminatedStringError) as ctx:
            tokenize_string("a\nb = 'oops", filename="bad.my")
        self.assertEqual(str(ctx.exception.location), "bad.my:2:5")
        self.assertIn("--> bad.my:2:5", str(ctx.exception))


class TestTokenizeFile(unittest.TestCase):

    def test_tokenize_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "program.my")
            with open(path, "w", encoding="utf-8") as f:
                f.write("def f():\n  return None\n")

            tokens = tokenize_file(path)

        self.assertEqual(format_tokens(tokens),
                         "Def Identifier{f} SingleChar{(} SingleChar{)} SingleChar{:} Newline "
                         "Indent Return None Newline Dedent Eof")
        self.assertEqual(tokens[0].location.filename, path)

    def test_missing_file(self):
        with self.assertRaises(OSError):
            tokenize_file(os.path.join(tempfile.gettempdir(), "does-not-exist.my"))


class TestLogging(unittest.TestCase):

    def test_indentation_is_logged(self):
        with self.assertLogs("mython.lexer.lexer", level="DEBUG") as logs:
            tokenize_string("a\n  b\n")
        self.assertTrue(any("Indent" in line for line in logs.output))
        self.assertTrue(any("Dedent" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
