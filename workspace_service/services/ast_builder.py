"""
ast_builder.py — Construcción del AST desde el parse tree
=========================================================

Responsabilidad: transformar el parse tree de Lark en AST del dominio.

Todos los métodos reciben primero el `meta` de Lark (posiciones propagadas)
y después los hijos ya transformados; los tokens anónimos (paréntesis,
llaves, palabras clave) ya vienen filtrados y los opcionales ausentes
llegan como None.
"""

from typing import List, Optional

from lark import Transformer, v_args, Token

from ..domain.ast_models import *
from ..domain.ast_utils import span


# ============================================================================
# UTILIDADES DE CONSTRUCCIÓN
# ============================================================================

class ASTBuilderUtils:
    """Métodos auxiliares para construcción del AST."""

    @staticmethod
    def location(meta) -> Optional[SrcLoc]:
        """Extrae ubicación del meta de una regla (None si la regla es vacía)."""
        if getattr(meta, "empty", True):
            return None
        return SrcLoc(
            line=meta.line,
            column=meta.column,
            offset=meta.start_pos,
            end_line=meta.end_line,
            end_column=meta.end_column,
            end_offset=meta.end_pos,
        )

    @staticmethod
    def token_location(tok: Token) -> SrcLoc:
        """Extrae ubicación de un token."""
        return SrcLoc(
            line=tok.line,
            column=tok.column,
            offset=tok.start_pos,
            end_line=tok.end_line,
            end_column=tok.end_column,
            end_offset=tok.end_pos,
        )

    @staticmethod
    def filter_tokens(*items):
        """Filtra tokens y placeholders, devuelve solo nodos AST."""
        return [it for it in items if it is not None and not isinstance(it, Token)]

    @staticmethod
    def tokens_of(items, token_type: str) -> List[Token]:
        return [it for it in items if isinstance(it, Token) and it.type == token_type]


_LITERAL_TYPES = {
    "INT": "int",
    "FLOAT": "float",
    "STRING": "string",
    "TRUE": "boolean",
    "FALSE": "boolean",
    "NULL": "null",
}


# ============================================================================
# TRANSFORMER PRINCIPAL
# ============================================================================

@v_args(meta=True, inline=True)
class BuildAST(Transformer):
    """
    Transformer de Lark → AST del dominio.

    Cada método corresponde a una regla (o alias) de la gramática.
    """

    def __init__(self):
        super().__init__()
        self.utils = ASTBuilderUtils()

    # ------------------------------------------------------------------------
    # PROGRAMA Y FUNCIONES
    # ------------------------------------------------------------------------

    def program(self, meta, *functions):
        """Nodo raíz del programa."""
        return Program(functions=list(functions), loc=self.utils.location(meta))

    def function_def(self, meta, name_tok, params, returns, body):
        return Function(
            name=str(name_tok),
            parameters=params if params is not None else ParameterList(),
            return_parameters=returns,
            body=body,
            loc=self.utils.location(meta),
        )

    def parameter_list(self, meta, *params):
        return ParameterList(parameters=list(params), loc=self.utils.location(meta))

    def parameter(self, meta, type_name, name_tok):
        return Parameter(
            type_name=type_name,
            name=str(name_tok),
            name_loc=self.utils.token_location(name_tok),
            loc=self.utils.location(meta),
        )

    def return_parameters(self, meta, params):
        """`( ... )` de retorno; una lista vacía queda sin ubicación."""
        return params if params is not None else ParameterList()

    def return_parameter_list(self, meta, *params):
        return ParameterList(parameters=list(params), loc=self.utils.location(meta))

    def return_parameter(self, meta, type_name, name_tok):
        return Parameter(
            type_name=type_name,
            name=str(name_tok) if name_tok is not None else None,
            name_loc=self.utils.token_location(name_tok) if name_tok is not None else None,
            loc=self.utils.location(meta),
        )

    def type_name(self, meta, *items):
        """Tipo simple, calificado (pkg:T), restringido (map<T>) y/o arreglo."""
        names = self.utils.tokens_of(items, "NAME")
        dims = self.utils.tokens_of(items, "ARRAY_DIM")
        constraint = next((it for it in items if isinstance(it, TypeName)), None)

        package, name = (str(names[0]), str(names[1])) if len(names) == 2 else (None, str(names[0]))
        return TypeName(
            name=name,
            package=package,
            constraint=constraint,
            dimensions=len(dims),
            loc=self.utils.location(meta),
        )

    def type_constraint(self, meta, type_name):
        return type_name

    # ------------------------------------------------------------------------
    # BLOQUES Y SENTENCIAS SIMPLES
    # ------------------------------------------------------------------------

    def block(self, meta, *statements):
        return Block(statements=list(statements), loc=self.utils.location(meta))

    def variable_def(self, meta, type_name, name_tok, initializer):
        return VariableDefinition(
            type_name=type_name,
            name=str(name_tok),
            name_loc=self.utils.token_location(name_tok),
            initializer=initializer,
            loc=self.utils.location(meta),
        )

    def assignment(self, meta, var_tok, targets, expression):
        return Assignment(
            declare=var_tok is not None,
            targets=targets,
            expression=expression,
            loc=self.utils.location(meta),
        )

    def expression_stmt(self, meta, invocation):
        return ExpressionStatement(expression=invocation, loc=self.utils.location(meta))

    def while_stmt(self, meta, condition, body):
        return While(condition=condition, body=body, loc=self.utils.location(meta))

    def break_stmt(self, meta):
        return Break(loc=self.utils.location(meta))

    def next_stmt(self, meta):
        return Next(loc=self.utils.location(meta))

    def return_stmt(self, meta, expressions):
        return Return(expressions=list(expressions or []), loc=self.utils.location(meta))

    def reply_stmt(self, meta, expression):
        return Reply(expression=expression, loc=self.utils.location(meta))

    def throw_stmt(self, meta, expression):
        return Throw(expression=expression, loc=self.utils.location(meta))

    def retry_stmt(self, meta, count):
        return Retry(count=count, loc=self.utils.location(meta))

    def worker_invocation(self, meta, references, worker_tok):
        return WorkerInvocation(
            references=references,
            worker=str(worker_tok),
            loc=self.utils.location(meta),
        )

    def worker_reply(self, meta, references, worker_tok):
        return WorkerReply(
            references=references,
            worker=str(worker_tok),
            loc=self.utils.location(meta),
        )

    # ------------------------------------------------------------------------
    # SENTENCIAS COMPUESTAS
    # ------------------------------------------------------------------------

    def if_else(self, meta, condition, then_body, *rest):
        """Condicional IF con cadenas else-if y else opcional."""
        else_ifs = [it for it in rest if isinstance(it, ElseIf)]
        else_body = next((it for it in rest if isinstance(it, Block)), None)
        return IfElse(
            condition=condition,
            then_body=then_body,
            else_ifs=else_ifs,
            else_body=else_body,
            loc=self.utils.location(meta),
        )

    def else_if_clause(self, meta, condition, body):
        return ElseIf(condition=condition, body=body, loc=self.utils.location(meta))

    def else_clause(self, meta, body):
        return body

    def try_catch(self, meta, try_body, *rest):
        catches = [it for it in rest if isinstance(it, Catch)]
        finally_body = next((it for it in rest if isinstance(it, Block)), None)
        return TryCatch(
            try_body=try_body,
            catches=catches,
            finally_body=finally_body,
            loc=self.utils.location(meta),
        )

    def catch_clause(self, meta, type_name, name_tok, body):
        return Catch(
            type_name=type_name,
            name=str(name_tok),
            body=body,
            loc=self.utils.location(meta),
        )

    def finally_clause(self, meta, body):
        return body

    def fork_join(self, meta, *items):
        """fork { workers } join (cond) (tipo nombre) { ... } [timeout]"""
        workers = [it for it in items if isinstance(it, Worker)]
        condition, type_name, name_tok, join_body, timeout = items[len(workers):]
        return ForkJoin(
            workers=workers,
            join_condition=condition,
            join_parameter=Parameter(
                type_name=type_name,
                name=str(name_tok),
                name_loc=self.utils.token_location(name_tok),
                loc=span(type_name.loc, self.utils.token_location(name_tok)),
            ),
            join_body=join_body,
            timeout=timeout,
            loc=self.utils.location(meta),
        )

    def worker_decl(self, meta, name_tok, body):
        return Worker(name=str(name_tok), body=body, loc=self.utils.location(meta))

    def join_all(self, meta, workers):
        return JoinCondition(
            condition_type="all",
            workers=workers or [],
            loc=self.utils.location(meta),
        )

    def join_some(self, meta, count_tok, workers):
        return JoinCondition(
            condition_type="some",
            count=int(count_tok),
            workers=workers or [],
            loc=self.utils.location(meta),
        )

    def worker_names(self, meta, *names):
        return [str(t) for t in names]

    def timeout_clause(self, meta, expression, type_name, name_tok, body):
        return Timeout(
            expression=expression,
            parameter=Parameter(
                type_name=type_name,
                name=str(name_tok),
                name_loc=self.utils.token_location(name_tok),
                loc=span(type_name.loc, self.utils.token_location(name_tok)),
            ),
            body=body,
            loc=self.utils.location(meta),
        )

    def transaction(self, meta, body, failed_body, aborted_body, committed_body):
        return Transaction(
            body=body,
            failed_body=failed_body,
            aborted_body=aborted_body,
            committed_body=committed_body,
            loc=self.utils.location(meta),
        )

    def failed_clause(self, meta, body):
        return body

    def aborted_clause(self, meta, body):
        return body

    def committed_clause(self, meta, body):
        return body

    # ------------------------------------------------------------------------
    # REFERENCIAS
    # ------------------------------------------------------------------------

    def variable_reference_list(self, meta, *references):
        return VariableReferenceList(references=list(references), loc=self.utils.location(meta))

    def simple_reference(self, meta, name_tok):
        return SimpleReference(name=str(name_tok), loc=self.utils.location(meta))

    def field_reference(self, meta, base, name_tok):
        return FieldReference(base=base, field=str(name_tok), loc=self.utils.location(meta))

    def index_reference(self, meta, base, index):
        return IndexReference(base=base, index=index, loc=self.utils.location(meta))

    # ------------------------------------------------------------------------
    # EXPRESIONES
    # ------------------------------------------------------------------------

    def expression_list(self, meta, *expressions):
        return list(expressions)

    def binary_expr(self, meta, left, op, right):
        return BinaryExpression(op=op, left=left, right=right, loc=self.utils.location(meta))

    def unary_expression(self, meta, op, operand):
        return UnaryExpression(op=op, operand=operand, loc=self.utils.location(meta))

    def _operator(self, meta, tok):
        return str(tok)

    or_op = and_op = eq_op = rel_op = add_op = mul_op = unary_op = _operator

    def invocation(self, meta, *items):
        """Llamada a función en expresión: fn(args) o pkg:fn(args)."""
        names = self.utils.tokens_of(items, "NAME")
        args = next((it for it in items if isinstance(it, list)), [])
        package, name = (str(names[0]), str(names[1])) if len(names) == 2 else (None, str(names[0]))
        return Invocation(
            name=name,
            package=package,
            arguments=list(args),
            loc=self.utils.location(meta),
        )

    def array_literal(self, meta, items):
        return ArrayLiteral(items=list(items or []), loc=self.utils.location(meta))

    def map_literal(self, meta, *entries):
        return MapLiteral(
            entries=self.utils.filter_tokens(*entries),
            loc=self.utils.location(meta),
        )

    def map_entry(self, meta, key_tok, value):
        quoted = key_tok.type == "STRING"
        return MapEntry(
            key=str(key_tok)[1:-1] if quoted else str(key_tok),
            quoted=quoted,
            value=value,
            loc=self.utils.location(meta),
        )

    def literal(self, meta, tok):
        value = str(tok)
        if tok.type == "STRING":
            value = value[1:-1]
        return BasicLiteral(
            literal_type=_LITERAL_TYPES[tok.type],
            value=value,
            loc=self.utils.location(meta),
        )


def build_ast_from_tree(tree) -> Program:
    """
    Función pública para construir AST desde parse tree.

    Args:
        tree: Parse tree de Lark

    Returns:
        Program: AST del dominio
    """
    ast = BuildAST().transform(tree)
    assert isinstance(ast, Program), "El resultado debe ser un Program"
    return ast
