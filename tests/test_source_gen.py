"""
Generación de código fuente
===========================

El texto generado, vuelto a parsear, produce el mismo árbol (sin contar
posiciones).
"""

import pytest

from workspace_service.domain.ast_utils import strip_locations
from workspace_service.services.fragment_parser import FragmentParser
from workspace_service.services.source_gen import generate_source


@pytest.fixture(scope="module")
def parser() -> FragmentParser:
    return FragmentParser()


@pytest.mark.parametrize("text,expected", [
    ("a + b * 2", "a + b * 2"),
    ("(a + b) * 2", "(a + b) * 2"),
    ("a - (b - c)", "a - (b - c)"),
    ("(a - b) - c", "a - b - c"),
    ("(a + b) * -c", "(a + b) * -c"),
    ("!(a && b) || c", "!(a && b) || c"),
    ('http:get("url", [1, 2.5], {"k": true, n: null})', 'http:get("url", [1, 2.5], {"k": true, n: null})'),
])
def test_expression_formatting(parser, text, expected):
    assert generate_source(parser.parse_fragment("expression", text).ok) == expected


def test_statement_layout(parser):
    node = parser.parse_fragment("statement", "if (a > b) { max = a; } else { max = b; }").ok

    assert generate_source(node) == (
        "if (a > b) {\n"
        "    max = a;\n"
        "} else {\n"
        "    max = b;\n"
        "}"
    )


def test_failed_block_has_no_braces(parser):
    node = parser.parse_fragment("transaction_failed", "retry 3;log(x);").ok

    assert generate_source(node) == "retry 3;\nlog(x);"


def test_parameter_lists(parser):
    args = parser.parse_fragment("argument_parameter_definitions", "int a,string[] b,map<json> c").ok
    returns = parser.parse_fragment("return_parameter_definitions", "int,string name").ok

    assert generate_source(args) == "int a, string[] b, map<json> c"
    assert generate_source(returns) == "int, string name"


ROUND_TRIP = [
    ("statement", "int x = 1;"),
    ("statement", "var a, b = split(s);"),
    ("statement", "while (i < 10) { i = i + 1; if (i == 5) { break; } }"),
    ("statement", "try { throw e; } catch (error err) { reply err; } finally { next; }"),
    ("statement", "fork { worker w1 { a -> w2; } worker w2 { b <- w1; } } "
                  "join (some 1 w1, w2) (map r) { return; } timeout (100) (map t) { return 1, 2; }"),
    ("statement", "transaction { update(db); } failed { retry 2; } aborted { } committed { log(1); }"),
    ("expression", "foo(1, \"x\", [1, 2], {k: v})"),
    ("join-condition", "some 2 w1, w2"),
    ("join-condition", "all w1"),
    ("argument_parameter_definitions", "int a, string[] b, http:Request c"),
    ("return_parameter_definitions", "int, string name"),
    ("transaction_failed", "retry 3; log(x);"),
    ("variable_reference_list", "a, b.c, d[0]"),
]


@pytest.mark.parametrize("kind,fragment", ROUND_TRIP)
def test_round_trip(parser, kind, fragment):
    first = parser.parse_fragment(kind, fragment)
    assert first.is_ok

    second = parser.parse_fragment(kind, generate_source(first.ok))

    assert second.is_ok
    assert strip_locations(second.ok) == strip_locations(first.ok)
