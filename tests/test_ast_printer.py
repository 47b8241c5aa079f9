"""
Tests for the prefix-notation tree printer.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxpy.lexer.tokens import Token, TokenType
from loxpy.lexer.literals import BooleanLiteral, NumberLiteral, StringLiteral
from loxpy.parser.ast_nodes import Binary, Grouping, LiteralExpr, Ternary, Unary
from loxpy.parser.ast_printer import AstPrinter, print_ast
from loxpy.parser.parser import parse_string


class TestAstPrinter(unittest.TestCase):
    """Test cases for AstPrinter."""

    def test_hand_built_tree(self):
        expr = Binary(
            Unary(Token(TokenType.MINUS, "-", None, 1), LiteralExpr(NumberLiteral(123.0))),
            Token(TokenType.STAR, "*", None, 1),
            Grouping(LiteralExpr(NumberLiteral(45.67)))
        )

        self.assertEqual(AstPrinter().print(expr), "(* (- 123) (group 45.67))")

    def test_parsed_tree(self):
        self.assertEqual(print_ast(parse_string("-123 * (45.67)")), "(* (- 123) (group 45.67))")

    def test_ternary(self):
        expr = Ternary(
            LiteralExpr(BooleanLiteral(True)),
            LiteralExpr(StringLiteral("yes")),
            LiteralExpr(None)
        )

        self.assertEqual(print_ast(expr), "(ternary true yes nil)")

    def test_comma(self):
        self.assertEqual(print_ast(parse_string("1, (2)")), "(, 1 (group 2))")

    def test_two_character_operator_heads(self):
        self.assertEqual(print_ast(parse_string("1 >= 2 != !false")), "(!= (>= 1 2) (! false))")

    def test_long_chain(self):
        """Operator chains are printed iteratively, however long they are."""
        printed = print_ast(parse_string(" + ".join(["1"] * 1000)))

        self.assertEqual(printed, "(+ " * 999 + "1" + " 1)" * 999)

    def test_chain_with_nested_right_operands(self):
        self.assertEqual(
            print_ast(parse_string("1 - 2 * 3 - -4")),
            "(- (- 1 (* 2 3)) (- 4))"
        )


if __name__ == "__main__":
    unittest.main()
