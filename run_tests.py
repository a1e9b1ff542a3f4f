#!/usr/bin/env python3
"""
Main test runner for loxcst tests.

Runs a short lex-and-parse smoke check, then the unittest suite in tests/.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_smoke_checks():
    """Lex and parse a few inputs and check the tree round-trips its text."""

    print("loxcst Test Suite")
    print("=" * 60)

    try:
        from loxcst.lexer import Lexer
        from loxcst.parser import Parser
        print("All loxcst modules imported successfully")
        print()
    except ImportError as e:
        print(f"Failed to import loxcst modules: {e}")
        return False

    cases = [
        ("arithmetic", "(1 + 2) * 3 - 4 / 5", 0),
        ("comparison and equality", '1 <= 2 == !false != "yes"', 0),
        ("trivia", "1 /* one */ + // two\n", 1),
        ("error recovery", "1 + ) ? 2", 2),
    ]

    for name, code, expected_errors in cases:
        print(f"  Testing {name}...")
        lexer = Lexer(code)
        tokens = lexer.tokenize()
        result = Parser(tokens).parse()

        if result.text() != code:
            print(f"     Tree text {result.text()!r} differs from input {code!r}")
            return False
        if len(result.errors) != expected_errors:
            print(f"     Expected {expected_errors} errors, got {list(result.errors)}")
            return False
        print(f"     {len(tokens)} tokens, errors: {list(result.errors)}")

    print()
    return True


def run_unit_tests():
    """Discover and run everything under tests/."""
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_smoke_checks() and run_unit_tests()
    sys.exit(0 if success else 1)
