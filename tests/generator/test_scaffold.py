# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the pytest scaffold generator."""

import ast

from featurelang.generator import Generator
from featurelang.parser import parse, tokenize

SOURCE = """\
Feature: Account withdrawals
  Money leaves the account.

  Scenario: Closed account
    Given a closed account
    Then withdrawals fail

  Scenario Outline: Withdraw
    Given a balance of <balance>
    When I withdraw <amount>
    Examples:
      | balance | amount |
      | 100     | 30     |
      | 50      | 50     |

  Scenario Outline: Single column
    Given <user>
    Examples:
      | user |
      | bob  |
"""


def _generator() -> Generator:
    return parse(tokenize(SOURCE))


class TestRender:
    def test_output_is_valid_python(self) -> None:
        ast.parse(_generator().render("withdrawals"))

    def test_one_test_per_scenario(self) -> None:
        assert _generator().test_names() == [
            "test_account_withdrawals_closed_account",
            "test_account_withdrawals_withdraw",
            "test_account_withdrawals_single_column",
        ]

    def test_functions_match_test_names(self) -> None:
        generator = _generator()
        module = ast.parse(generator.render())
        functions = [node.name for node in module.body if isinstance(node, ast.FunctionDef)]
        assert functions == generator.test_names()

    def test_steps_are_listed_as_comments(self) -> None:
        source = _generator().render()
        assert "    # Given a closed account" in source
        assert "    # Then withdrawals fail" in source

    def test_outline_is_parametrized(self) -> None:
        source = _generator().render()
        assert "@pytest.mark.parametrize('balance, amount', [('100', '30'), ('50', '50')])" in source
        assert "def test_account_withdrawals_withdraw(balance, amount):" in source

    def test_single_column_outline_uses_plain_values(self) -> None:
        source = _generator().render()
        assert "@pytest.mark.parametrize('user', ['bob'])" in source

    def test_description_is_kept_as_comment(self) -> None:
        assert "#   Money leaves the account." in _generator().render()

    def test_module_docstring_names_module(self) -> None:
        assert _generator().render("withdrawals").startswith('"""Generated test scaffold for withdrawals."""')

    def test_column_names_become_valid_parameters(self) -> None:
        source = (
            "Feature: F\n  Scenario Outline: S\n    Given <1st> <class> <pytest>\n    Examples:\n"
            "      | 1st | class | pytest |\n      | a   | b     | c      |\n"
        )
        rendered = parse(tokenize(source)).render()
        compile(rendered, "test_f.py", "exec")
        assert "def test_f_s(p_1st, class_, pytest_):" in rendered

    def test_columns_with_same_slug_get_distinct_parameters(self) -> None:
        source = (
            "Feature: F\n  Scenario Outline: S\n    Given <a b>\n    Examples:\n"
            "      | a b | a-b |\n      | 1   | 2   |\n"
        )
        rendered = parse(tokenize(source)).render()
        compile(rendered, "test_f.py", "exec")
        assert "def test_f_s(a_b, a_b_2):" in rendered

    def test_scenarios_with_same_slug_get_distinct_names(self) -> None:
        source = (
            "Feature: F\n  Scenario: Login ok\n    Given x\n  Scenario: Login-ok\n    Given y\n"
            "  Scenario: Login ok 2\n    Given z\n"
        )
        generator = parse(tokenize(source))
        names = generator.test_names()
        assert names == ["test_f_login_ok", "test_f_login_ok_3", "test_f_login_ok_2"]
        module = ast.parse(generator.render())
        functions = [node.name for node in module.body if isinstance(node, ast.FunctionDef)]
        assert functions == names

    def test_empty_ast(self) -> None:
        source = Generator({}).render()
        ast.parse(source)
        assert "import pytest" in source
