"""
Parser del lenguaje completo
============================

Comprueba que la gramática reconoce las construcciones que usan las
plantillas y que los errores de sintaxis vuelven como `ParseFailure`.
"""

import pytest

from workspace_service.domain.ast_models import (
    Assignment,
    BinaryExpression,
    ExpressionStatement,
    FieldReference,
    ForkJoin,
    IfElse,
    IndexReference,
    Program,
    Return,
    Transaction,
    TryCatch,
    UnaryExpression,
    VariableDefinition,
    While,
)
from workspace_service.domain.results import ParseFailure
from workspace_service.infrastructure.grammar_loader import GrammarLoader
from workspace_service.services.parse_driver import ParseDriver


PROGRAM = """
function main(string[] args)(int, string) {
    int count = 0;
    map<string> headers = {"Content-Type": "application/json", retries: 3};
    http:Request req = http:createRequest();
    var a, b = split(args[0]);
    a.b[1] = -count + 2 * (3 - 1);
    if (count >= 10 && !done) {
        break;
    } else if (count == 5) {
        next;
    } else {
        count = count + 1;
    }
    while (true) {
        system:println("loop");
    }
    try {
        throw err;
    } catch (error e) {
        reply e;
    } finally {
        log(1.5);
    }
    fork {
        worker w1 {
            a -> w2;
        }
        worker w2 {
            b <- w1;
        }
    } join (some 1 w1, w2) (map results) {
        return;
    } timeout (1000) (map partial) {
        return null;
    }
    transaction {
        update(db);
    } failed {
        retry 3;
    } aborted {
    } committed {
    }
    // comentario de línea
    /* comentario
       de bloque */
    return count, "done";
}
"""


@pytest.fixture(scope="module")
def driver() -> ParseDriver:
    return ParseDriver()


def test_parses_full_program(driver):
    program = driver.parse(PROGRAM)

    assert isinstance(program, Program)
    assert len(program.functions) == 1
    main = program.functions[0]
    assert main.name == "main"
    assert [p.name for p in main.parameters.parameters] == ["args"]
    assert main.parameters.parameters[0].type_name.dimensions == 1
    assert [p.type_name.name for p in main.return_parameters.parameters] == ["int", "string"]

    kinds = [type(s) for s in main.body.statements]
    assert kinds == [
        VariableDefinition,
        VariableDefinition,
        VariableDefinition,
        Assignment,
        Assignment,
        IfElse,
        While,
        TryCatch,
        ForkJoin,
        Transaction,
        Return,
    ]


def test_expression_precedence(driver):
    program = driver.parse(PROGRAM)
    assignment = program.functions[0].body.statements[4]

    target = assignment.targets.references[0]
    assert isinstance(target, IndexReference)
    assert isinstance(target.base, FieldReference)

    expr = assignment.expression
    assert isinstance(expr, BinaryExpression) and expr.op == "+"
    assert isinstance(expr.left, UnaryExpression) and expr.left.op == "-"
    assert isinstance(expr.right, BinaryExpression) and expr.right.op == "*"


def test_fork_join_details(driver):
    fork = driver.parse(PROGRAM).functions[0].body.statements[8]

    assert [w.name for w in fork.workers] == ["w1", "w2"]
    assert fork.join_condition.condition_type == "some"
    assert fork.join_condition.count == 1
    assert fork.join_condition.workers == ["w1", "w2"]
    assert fork.join_parameter.name == "results"
    assert fork.timeout is not None
    assert fork.timeout.parameter.name == "partial"


def test_qualified_names(driver):
    statements = driver.parse(PROGRAM).functions[0].body.statements
    req = statements[2]
    assert (req.type_name.package, req.type_name.name) == ("http", "Request")
    assert req.initializer.package == "http"


def test_locations_are_absolute(driver):
    source = "function f(){\n  int x = 1;\n}"
    definition = driver.parse(source).functions[0].body.statements[0]

    assert definition.loc.line == 2
    assert definition.loc.column == 3
    assert source[definition.loc.offset:definition.loc.end_offset] == "int x = 1;"


def test_empty_program(driver):
    assert driver.parse("").functions == []


def test_syntax_error_is_returned(driver):
    failure = driver.parse("function f(){\nint x = ;\n}")

    assert isinstance(failure, ParseFailure)
    assert failure.line == 2
    assert failure.column == 9
    assert failure.offset == 22
    assert failure.message.startswith("unexpected ';'")


def test_unexpected_end_of_input(driver):
    failure = driver("function f(){")

    assert isinstance(failure, ParseFailure)
    assert "end of input" in failure.message


def test_unterminated_block_comment(driver):
    assert isinstance(driver.parse("function f(){ /* sin cerrar }"), ParseFailure)


def test_expression_statement_requires_invocation(driver):
    assert isinstance(driver.parse("function f(){ a; }"), ParseFailure)
    statement = driver.parse("function f(){ a(); }").functions[0].body.statements[0]
    assert isinstance(statement, ExpressionStatement)


def test_grammar_is_packaged():
    assert GrammarLoader.path_for().name == "ballerina.lark"
    assert "program: function_def*" in GrammarLoader.load()
    with pytest.raises(FileNotFoundError):
        GrammarLoader.load("no_such_grammar")
