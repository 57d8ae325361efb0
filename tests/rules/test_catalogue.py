from __future__ import annotations

from typing import Sequence

import pytest

from cpp_style_checker.rules import CHECKS_BY_ID, leading_spaces
from cpp_style_checker.rules import catalogue


def run_check(check_id: str, lines: Sequence[str], index: int = 0) -> str | None:
    return CHECKS_BY_ID[check_id].function(list(lines), index)


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("int x = 5;", True),
        ("double r=2;", True),
        ("  INT Y = 1;", True),
        ("int count = 5;", False),
        ("int x;", False),
        ("// int x = 5;", False),
    ],
)
def test_single_letter_variable(line: str, flagged: bool) -> None:
    assert (run_check("single-letter-variable", [line]) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("total = price * 1.13;", True),
        ("area = 3.14159*r*r;", True),
        ("x = 3;", False),
        ("const double TAX = 1.13;", False),
        ("double myconstant = 2.5;", False),
        ("  // x = 1.5;", False),
    ],
)
def test_magic_number(line: str, flagged: bool) -> None:
    assert (run_check("magic-number", [line]) is not None) is flagged


def test_constant_naming_message_names_identifier() -> None:
    message = run_check("constant-naming", ["const int maxSize = 10;"])

    assert message == "Constant 'maxSize' should be in ALL_CAPS (e.g., MAX_SIZE, not maxSize)."


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("const int MAX_SIZE = 10;", False),
        ("const double RATE_2 = 0.5;", False),
        ("int size = 10;", False),
        # Comments are not considered by this check.
        ("// const int maxSize = 10;", True),
    ],
)
def test_constant_naming(line: str, flagged: bool) -> None:
    assert (run_check("constant-naming", [line]) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("double total;", True),
        ("  bool done ;", True),
        ("double total = 0;", False),
        ("double total; // running sum", False),
        ("string name;", False),
    ],
)
def test_uninitialized_variable(line: str, flagged: bool) -> None:
    assert (run_check("uninitialized-variable", [line]) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("while (count<10)", True),
        ("if (a&&b)", True),
        ("if (a||b)", True),
        ("if (total+1 > 0)", True),
        ("for (int i=0; i < n; i++)", True),
        ("for (int i = 0; i < n; i++)", False),
        ("if (x < 5)", False),
        ("// if (x<5)", False),
    ],
)
def test_condition_spacing(line: str, flagged: bool) -> None:
    assert (run_check("condition-spacing", [line]) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("bool same = a==b;", True),
        ("done = a&&b;", True),
        ("cout<<value;", True),
        ("x = a<b;", False),
        ("if (a==b)", False),
        # "information" contains "for", which skips the check.
        ("int information = a==b;", False),
        ("// same = a==b;", False),
    ],
)
def test_expression_spacing(line: str, flagged: bool) -> None:
    assert (run_check("expression-spacing", [line]) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("if (x > 0) return 1;", True),
        ("if(done)break;", True),
        ("if (x > 0) return 1; // done", False),
        ("if (x > 0)", False),
        ("if (x > 0) {", False),
    ],
)
def test_statement_on_condition_line(line: str, flagged: bool) -> None:
    assert (run_check("statement-on-condition-line", [line]) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "flagged"),
    [
        ("int main() {", True),
        ("while (x){", True),
        ("int main()", False),
        ("// main() {", False),
    ],
)
def test_brace_placement(line: str, flagged: bool) -> None:
    assert (run_check("brace-placement", [line]) is not None) is flagged


def test_opening_brace_reports_expected_and_found() -> None:
    message = run_check("opening-brace-alignment", ["int main()", "  {"], 1)

    assert message == (
        "Opening brace should align with its control structure "
        "(expected 0 spaces, found 2 spaces)."
    )


def test_opening_brace_skips_blank_and_comment_lines() -> None:
    lines = ["  while (x)", "", "  // loop body", "  {"]

    assert run_check("opening-brace-alignment", lines, 3) is None
    assert run_check("opening-brace-alignment", ["{"], 0) is None


NESTED = [
    "int main()",
    "{",
    "  if (x)",
    "  {",
    "    y = 1;",
    "  }",
    "  }",
]


def test_closing_brace_uses_matching_opener() -> None:
    assert run_check("closing-brace-alignment", NESTED, 5) is None
    assert run_check("closing-brace-alignment", NESTED, 6) == (
        "Closing brace should align with opening brace (expected 0 spaces, found 2 spaces)."
    )


def test_closing_brace_without_opener_is_silent() -> None:
    assert run_check("closing-brace-alignment", ["  }"], 0) is None
    assert run_check("closing-brace-alignment", ["int main() {", "  return 0;", "  }"], 2) is None


@pytest.mark.parametrize(
    ("lines", "flagged"),
    [
        (['ofstream out("a.txt");', "out << 1;"], True),
        (['ifstream fin("a.txt");', "if (fin.fail())", "{"], True),
        (['ifstream fin("a.txt");', "", "", "", "", "if (!fin)"], True),
        (['ifstream fin("a.txt");'], True),
        (['ifstream fin("a.txt");', "if (!fin)"], False),
        (['ofstream out("a.txt");', "", "", "", "if (!out) return 1;"], False),
    ],
)
def test_file_stream_check(lines: list[str], flagged: bool) -> None:
    assert (run_check("file-stream-check", lines) is not None) is flagged


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("   x = 1;", "Indentation should be multiples of 2 spaces. This line has 3 spaces."),
        (" y;", "Indentation should be multiples of 2 spaces. This line has 1 spaces."),
        ("    x = 1;", None),
        ("\t x = 1;", None),
        ("   ", None),
        ("   // note", None),
    ],
)
def test_indentation_granularity(line: str, message: str | None) -> None:
    assert run_check("indentation-granularity", [line]) == message


@pytest.mark.parametrize(
    ("lines", "index", "message"),
    [
        (["{", "x = 1;"], 1, "Statement inside block should be indented 2 spaces (found 0 spaces)."),
        (["{", "  {", "  }", "x;"], 3, "Statement inside block should be indented 2 spaces (found 0 spaces)."),
        (["{", "  x = 1;"], 1, None),
        (["{", "    x = 1;"], 1, None),
        (["{", "if (x)"], 1, None),
        (["{", "else"], 1, None),
        (["{", "}", "x = 1;"], 2, None),
        (["int main() {", "x = 1;"], 1, None),
        (["x = 1;"], 0, None),
    ],
)
def test_indentation_depth(lines: list[str], index: int, message: str | None) -> None:
    assert run_check("indentation-depth", lines, index) == message


@pytest.mark.parametrize(
    ("check_id", "lines", "index", "flagged"),
    [
        ("single-letter-variable", ["int\u3000x = 5;"], 0, True),
        ("magic-number", ["total = price *\u00a01.13;"], 0, True),
        ("magic-number", ["\ufeff// x = 1.5;"], 0, False),
        ("constant-naming", ["const\u00a0int\u2003maxSize = 10;"], 0, True),
        ("uninitialized-variable", ["int\u00a0count;"], 0, True),
        ("uninitialized-variable", ["int\x1ccount;"], 0, False),
        ("condition-spacing", ["while\u2003(count<10)"], 0, True),
        ("statement-on-condition-line", ["if (x > 0)\u00a0return 1;"], 0, True),
        ("brace-placement", ["int main()\u202f{"], 0, True),
        ("opening-brace-alignment", ["int main()", "  {\ufeff"], 1, True),
        ("closing-brace-alignment", ["{", "x;", "  }\ufeff"], 2, True),
        ("indentation-granularity", ["   \ufeff"], 0, False),
        ("indentation-depth", ["\ufeff{", "x = 1;"], 1, True),
        ("indentation-depth", ["{\u2028", "\u00a0x = 1;"], 1, True),
    ],
)
def test_unicode_whitespace_matches_browser_set(
    check_id: str, lines: list[str], index: int, flagged: bool
) -> None:
    assert (run_check(check_id, lines, index) is not None) is flagged


def test_strip_whitespace_removes_bom_but_not_control_separators() -> None:
    assert catalogue.strip_whitespace("\ufeff\u00a0{ ") == "{"
    assert catalogue.strip_whitespace("\x1c{\x85") == "\x1c{\x85"


@pytest.mark.parametrize(
    ("line", "expected"),
    [("   x", 3), ("\t  x", 0), ("", 0), ("x  ", 0)],
)
def test_leading_spaces(line: str, expected: int) -> None:
    assert leading_spaces(line) == expected


def test_check_table_is_ordered() -> None:
    assert [check.check_id for check in catalogue.CHECKS][:4] == [
        "single-letter-variable",
        "magic-number",
        "constant-naming",
        "uninitialized-variable",
    ]
    assert catalogue.CHECKS[-1].check_id == "indentation-depth"
