"""
Parser de fragmentos
====================

Escenarios de extremo a extremo: envolver → parsear → extraer, con las
posiciones siempre relativas al texto del fragmento.
"""

import logging

import pytest

from workspace_service.domain.ast_models import (
    BinaryExpression,
    Block,
    JoinCondition,
    ParameterList,
    Retry,
    SimpleReference,
    VariableDefinition,
    VariableReferenceList,
)
from workspace_service.domain.ast_utils import iter_locations, strip_locations
from workspace_service.domain.errors import ParseCancelledError
from workspace_service.domain.fragments import FragmentKind
from workspace_service.domain.results import ParseFailure
from workspace_service.services.fragment_parser import FragmentParser, get_fragment_parser


# ----------------------------------------------------------------------------
# Escenarios de referencia
# ----------------------------------------------------------------------------

def test_statement_variable_definition(fragment_parser):
    result = fragment_parser.parse_fragment("statement", "int x = 1;")

    assert result.error is None
    node = result.ok
    assert isinstance(node, VariableDefinition)
    assert node.type_name.name == "int"
    assert node.name == "x"
    assert (node.name_loc.line, node.name_loc.column) == (1, 5)
    assert node.loc.offset == 0
    assert node.loc.end_offset == len("int x = 1;")


def test_expression_precedence(fragment_parser):
    result = fragment_parser.parse_fragment("expression", "a + b * 2")

    node = result.ok
    assert isinstance(node, BinaryExpression)
    assert node.op == "+"
    assert isinstance(node.left, SimpleReference) and node.left.name == "a"
    assert isinstance(node.right, BinaryExpression) and node.right.op == "*"
    assert (node.loc.line, node.loc.column) == (1, 1)


def test_argument_parameter_list(fragment_parser):
    result = fragment_parser.parse_fragment("argument_parameter_definitions", "int a, string b")

    node = result.ok
    assert isinstance(node, ParameterList)
    assert [p.type_name.name for p in node.parameters] == ["int", "string"]
    assert [p.name for p in node.parameters] == ["a", "b"]
    assert (node.parameters[1].loc.line, node.parameters[1].loc.column) == (1, 8)


def test_return_parameter_list(fragment_parser):
    result = fragment_parser.parse_fragment("return_parameter_definitions", "int, string")

    node = result.ok
    assert isinstance(node, ParameterList)
    assert len(node.parameters) == 2
    assert [p.type_name.name for p in node.parameters] == ["int", "string"]
    assert all(p.name is None for p in node.parameters)


def test_join_condition_all(fragment_parser):
    result = fragment_parser.parse_fragment("join-condition", "all")

    node = result.ok
    assert isinstance(node, JoinCondition)
    assert node.condition_type == "all"
    assert (node.loc.offset, node.loc.end_offset) == (0, 3)


def test_syntax_error_position_is_fragment_relative(fragment_parser):
    result = fragment_parser.parse_fragment("statement", "int x =")

    assert result.ok is None
    assert result.error.phase == "parse"
    assert result.error.code == "syntax_error"
    assert (result.error.line, result.error.column) == (1, 8)


# ----------------------------------------------------------------------------
# Resto de tipos
# ----------------------------------------------------------------------------

def test_join_condition_some(fragment_parser):
    node = fragment_parser.parse_fragment(FragmentKind.JOIN_CONDITION, "some 2 w1, w2").ok

    assert node.condition_type == "some"
    assert node.count == 2
    assert node.workers == ["w1", "w2"]


def test_transaction_failed_block(fragment_parser):
    """La plantilla no tiene salto de línea: la columna también se rebasa."""
    result = fragment_parser.parse_fragment("transaction_failed", "retry 3;")

    node = result.ok
    assert isinstance(node, Block)
    assert len(node.statements) == 1
    retry = node.statements[0]
    assert isinstance(retry, Retry)
    assert (retry.loc.line, retry.loc.column, retry.loc.offset) == (1, 1, 0)
    assert retry.loc.end_offset == 8


def test_variable_reference_list(fragment_parser):
    node = fragment_parser.parse_fragment("variable_reference_list", "a, b.c, d[0]").ok

    assert isinstance(node, VariableReferenceList)
    assert [r.kind for r in node.references] == ["simple_reference", "field_reference", "index_reference"]
    assert node.references[2].loc.column == 9


def test_multiple_statements_become_block(fragment_parser):
    fragment = "int x = 1;\nfoo(x);"
    result = fragment_parser.parse_fragment("statement", fragment)

    node = result.ok
    assert isinstance(node, Block)
    assert [s.kind for s in node.statements] == ["variable_definition", "expression_statement"]
    assert (node.statements[1].loc.line, node.statements[1].loc.column) == (2, 1)
    assert (node.loc.offset, node.loc.end_offset) == (0, len(fragment))
    assert result.warnings == []


def test_placeholder_text_inside_fragment(fragment_parser):
    node = fragment_parser.parse_fragment("statement", 'string s = "$FRAGMENT";').ok

    assert node.initializer.value == "$FRAGMENT"


# ----------------------------------------------------------------------------
# Fragmentos vacíos y sobrantes
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("fragment", ["", "   \n\t  "])
def test_empty_statement(fragment_parser, fragment):
    result = fragment_parser.parse_fragment("statement", fragment)

    assert result.ok is None
    assert result.error.phase == "extract"
    assert result.error.code == "empty"


@pytest.mark.parametrize("kind", ["join-condition", "return_parameter_definitions"])
def test_empty_fragment_errors(fragment_parser, kind):
    assert fragment_parser.parse_fragment(kind, "").error.code == "empty"


def test_empty_argument_list_is_valid(fragment_parser):
    result = fragment_parser.parse_fragment("argument_parameter_definitions", "")

    assert result.error is None
    assert result.ok.parameters == []


def test_empty_failed_block_is_valid(fragment_parser):
    result = fragment_parser.parse_fragment("transaction_failed", "")

    assert result.ok.statements == []
    assert (result.ok.loc.offset, result.ok.loc.end_offset) == (0, 0)


@pytest.mark.parametrize("kind", ["expression", "variable_reference_list"])
def test_empty_slot_is_a_syntax_error(fragment_parser, kind):
    assert fragment_parser.parse_fragment(kind, "").error.code == "syntax_error"


def test_surplus_statements_warn(fragment_parser, caplog):
    with caplog.at_level(logging.WARNING):
        result = fragment_parser.parse_fragment("expression", "a; foo()")

    assert isinstance(result.ok, SimpleReference)
    assert [w.code for w in result.warnings] == ["unexpected_surplus"]
    assert "surplus" in caplog.text


def test_wrong_shape_is_node_not_found(fragment_parser):
    result = fragment_parser.parse_fragment("variable_reference_list", "int x")

    assert result.error.phase == "extract"
    assert result.error.code == "node_not_found"


# ----------------------------------------------------------------------------
# Configuración y cancelación
# ----------------------------------------------------------------------------

def test_unknown_kind(fragment_parser):
    result = fragment_parser.parse_fragment("bogus", "x")

    assert result.error.phase == "config"
    assert result.error.code == "unknown_kind"


def test_template_without_placeholder():
    parser = FragmentParser(templates={FragmentKind.STATEMENT: "function testFunction(){}"})

    result = parser.parse_fragment("statement", "int x = 1;")

    assert result.error.phase == "config"
    assert result.error.code == "placeholder_missing"


def test_kind_missing_from_custom_table():
    parser = FragmentParser(templates={FragmentKind.STATEMENT: "function f(){$FRAGMENT}"})

    assert parser.parse_fragment("expression", "1").error.code == "unknown_kind"


def test_cancelled_parse():
    def cancelled(source):
        raise ParseCancelledError("parse cancelled by caller")

    result = FragmentParser(parse_program=cancelled).parse_fragment("statement", "int x = 1;")

    assert result.ok is None
    assert result.error.phase == "parse"
    assert result.error.code == "cancelled"


def test_injected_failure_without_position_clamps_to_end():
    def failing(source):
        return ParseFailure(message="boom")

    result = FragmentParser(parse_program=failing).parse_fragment("statement", "a = 1;\nb")

    assert result.error.code == "syntax_error"
    assert (result.error.line, result.error.column) == (2, 2)


# ----------------------------------------------------------------------------
# Propiedades
# ----------------------------------------------------------------------------

SAMPLES = [
    ("statement", "int x = 1;"),
    ("statement", "if (a > b) {\n  max = a;\n} else {\n  max = b;\n}"),
    ("statement", "fork {\n worker w1 { a -> w2; }\n} join (all) (map r) {\n}"),
    ("expression", "foo(1, \"x\", [1, 2], {k: v})"),
    ("argument_parameter_definitions", "int a,\n  map<json> b"),
    ("return_parameter_definitions", "int, string name"),
    ("join-condition", "some 1 w1"),
    ("transaction_failed", "retry 3;\nlog(x);"),
    ("variable_reference_list", "a, b.c"),
]


@pytest.mark.parametrize("kind,fragment", SAMPLES)
def test_locations_stay_inside_fragment(fragment_parser, kind, fragment):
    result = fragment_parser.parse_fragment(kind, fragment)

    assert result.is_ok
    for loc in iter_locations(result.ok):
        assert 0 <= loc.offset <= loc.end_offset <= len(fragment)
        assert loc.line == fragment.count("\n", 0, loc.offset) + 1
        assert loc.column == loc.offset - (fragment.rfind("\n", 0, loc.offset) + 1) + 1


@pytest.mark.parametrize("kind,fragment", SAMPLES)
def test_parsing_is_deterministic(fragment_parser, kind, fragment):
    first = fragment_parser.parse_fragment(kind, fragment)
    second = FragmentParser().parse_fragment(kind, fragment)

    assert first == second
    assert strip_locations(first.ok) == strip_locations(second.ok)


def test_result_payload():
    payload = get_fragment_parser().parse_fragment("join-condition", "all").to_payload()

    assert payload["ok"]["kind"] == "join_condition"
    assert payload["error"] is None
    assert payload["warnings"] == []
