"""
source_gen.py — Generación de código fuente desde el AST
========================================================

Recorre nodos del AST y emite texto del lenguaje con un formato canónico
(sangría de 4 espacios, una sentencia por línea). Sirve para devolver al
editor el texto de un nodo editado y para comprobar el ida y vuelta
fragmento → AST → texto → AST.

Un Block de nivel superior se emite sin llaves (forma de fragmento, p. ej.
el cuerpo de la cláusula failed); los bloques anidados llevan llaves.
"""

from typing import List

from ..domain.ast_models import *


INDENT = "    "

# Precedencia de operadores binarios (mayor = liga más fuerte)
BINARY_PRECEDENCE = {
    "||": 1,
    "&&": 2,
    "==": 3, "!=": 3,
    "<": 4, "<=": 4, ">": 4, ">=": 4,
    "+": 5, "-": 5,
    "*": 6, "/": 6, "%": 6,
}
UNARY_PRECEDENCE = 7
PRIMARY_PRECEDENCE = 8


class SourceGenerator:
    """Visitor de generación de código: un método `visit_<kind>` por nodo."""

    def generate(self, node) -> str:
        if isinstance(node, Block):
            return "\n".join(self._statement_lines(node.statements, 0))
        if isinstance(node, ParameterList):
            return self.visit_parameter_list(node)
        return self.visit(node)

    def visit(self, node, level: int = 0) -> str:
        method = getattr(self, f"visit_{node.kind}", None)
        if method is None:
            raise ValueError(f"No source generator for node kind {node.kind!r}")
        return method(node, level) if self._is_statement(node) else method(node)

    # ------------------------------------------------------------------------
    # UTILIDADES
    # ------------------------------------------------------------------------

    @staticmethod
    def _is_statement(node) -> bool:
        return isinstance(node, Statement.__args__)

    def _statement_lines(self, statements, level: int) -> List[str]:
        return [self.visit(s, level) for s in statements]

    def _block(self, block: Block, level: int) -> str:
        """Bloque con llaves; la llave de apertura queda en la línea actual."""
        if not block.statements:
            return "{\n" + INDENT * level + "}"
        body = "\n".join(self._statement_lines(block.statements, level + 1))
        return "{\n" + body + "\n" + INDENT * level + "}"

    def _expressions(self, expressions) -> str:
        return ", ".join(self.visit(e) for e in expressions)

    @staticmethod
    def _precedence(expr) -> int:
        if isinstance(expr, BinaryExpression):
            return BINARY_PRECEDENCE[expr.op]
        if isinstance(expr, UnaryExpression):
            return UNARY_PRECEDENCE
        return PRIMARY_PRECEDENCE

    def _operand(self, expr, minimum: int) -> str:
        text = self.visit(expr)
        return f"({text})" if self._precedence(expr) < minimum else text

    # ------------------------------------------------------------------------
    # TIPOS Y PARÁMETROS
    # ------------------------------------------------------------------------

    def visit_type_name(self, node: TypeName) -> str:
        text = f"{node.package}:{node.name}" if node.package else node.name
        if node.constraint is not None:
            text += f"<{self.visit_type_name(node.constraint)}>"
        return text + "[]" * node.dimensions

    def visit_parameter(self, node: Parameter) -> str:
        text = self.visit_type_name(node.type_name)
        return f"{text} {node.name}" if node.name else text

    def visit_parameter_list(self, node: ParameterList) -> str:
        return ", ".join(self.visit_parameter(p) for p in node.parameters)

    # ------------------------------------------------------------------------
    # EXPRESIONES
    # ------------------------------------------------------------------------

    def visit_basic_literal(self, node: BasicLiteral) -> str:
        if node.literal_type == "string":
            return f'"{node.value}"'
        return node.value

    def visit_simple_reference(self, node: SimpleReference) -> str:
        return node.name

    def visit_field_reference(self, node: FieldReference) -> str:
        return f"{self.visit(node.base)}.{node.field}"

    def visit_index_reference(self, node: IndexReference) -> str:
        return f"{self.visit(node.base)}[{self.visit(node.index)}]"

    def visit_invocation(self, node: Invocation) -> str:
        name = f"{node.package}:{node.name}" if node.package else node.name
        return f"{name}({self._expressions(node.arguments)})"

    def visit_unary_expression(self, node: UnaryExpression) -> str:
        return node.op + self._operand(node.operand, UNARY_PRECEDENCE)

    def visit_binary_expression(self, node: BinaryExpression) -> str:
        precedence = BINARY_PRECEDENCE[node.op]
        # Asociatividad por la izquierda: el operando derecho con la misma
        # precedencia necesita paréntesis
        left = self._operand(node.left, precedence)
        right = self._operand(node.right, precedence + 1)
        return f"{left} {node.op} {right}"

    def visit_array_literal(self, node: ArrayLiteral) -> str:
        return f"[{self._expressions(node.items)}]"

    def visit_map_literal(self, node: MapLiteral) -> str:
        return "{" + ", ".join(self.visit_map_entry(e) for e in node.entries) + "}"

    def visit_map_entry(self, node: MapEntry) -> str:
        key = f'"{node.key}"' if node.quoted else node.key
        return f"{key}: {self.visit(node.value)}"

    def visit_variable_reference_list(self, node: VariableReferenceList) -> str:
        return self._expressions(node.references)

    def visit_join_condition(self, node: JoinCondition) -> str:
        parts = [node.condition_type]
        if node.count is not None:
            parts.append(str(node.count))
        if node.workers:
            parts.append(", ".join(node.workers))
        return " ".join(parts)

    # ------------------------------------------------------------------------
    # SENTENCIAS
    # ------------------------------------------------------------------------

    def visit_variable_definition(self, node: VariableDefinition, level: int) -> str:
        text = f"{INDENT * level}{self.visit_type_name(node.type_name)} {node.name}"
        if node.initializer is not None:
            text += f" = {self.visit(node.initializer)}"
        return text + ";"

    def visit_assignment(self, node: Assignment, level: int) -> str:
        prefix = "var " if node.declare else ""
        targets = self.visit_variable_reference_list(node.targets)
        return f"{INDENT * level}{prefix}{targets} = {self.visit(node.expression)};"

    def visit_expression_statement(self, node: ExpressionStatement, level: int) -> str:
        return f"{INDENT * level}{self.visit(node.expression)};"

    def visit_if_else(self, node: IfElse, level: int) -> str:
        text = f"{INDENT * level}if ({self.visit(node.condition)}) {self._block(node.then_body, level)}"
        for else_if in node.else_ifs:
            text += f" else if ({self.visit(else_if.condition)}) {self._block(else_if.body, level)}"
        if node.else_body is not None:
            text += f" else {self._block(node.else_body, level)}"
        return text

    def visit_while(self, node: While, level: int) -> str:
        return f"{INDENT * level}while ({self.visit(node.condition)}) {self._block(node.body, level)}"

    def visit_break(self, node: Break, level: int) -> str:
        return f"{INDENT * level}break;"

    def visit_next(self, node: Next, level: int) -> str:
        return f"{INDENT * level}next;"

    def visit_return(self, node: Return, level: int) -> str:
        if not node.expressions:
            return f"{INDENT * level}return;"
        return f"{INDENT * level}return {self._expressions(node.expressions)};"

    def visit_reply(self, node: Reply, level: int) -> str:
        return f"{INDENT * level}reply {self.visit(node.expression)};"

    def visit_throw(self, node: Throw, level: int) -> str:
        return f"{INDENT * level}throw {self.visit(node.expression)};"

    def visit_retry(self, node: Retry, level: int) -> str:
        return f"{INDENT * level}retry {self.visit(node.count)};"

    def visit_try_catch(self, node: TryCatch, level: int) -> str:
        text = f"{INDENT * level}try {self._block(node.try_body, level)}"
        for catch in node.catches:
            param = f"{self.visit_type_name(catch.type_name)} {catch.name}"
            text += f" catch ({param}) {self._block(catch.body, level)}"
        if node.finally_body is not None:
            text += f" finally {self._block(node.finally_body, level)}"
        return text

    def visit_fork_join(self, node: ForkJoin, level: int) -> str:
        workers = "".join(
            f"\n{INDENT * (level + 1)}worker {w.name} {self._block(w.body, level + 1)}"
            for w in node.workers
        )
        fork = "{" + (workers + "\n" + INDENT * level if workers else "") + "}"
        condition = self.visit_join_condition(node.join_condition) if node.join_condition else ""
        text = (
            f"{INDENT * level}fork {fork} join ({condition}) "
            f"({self.visit_parameter(node.join_parameter)}) {self._block(node.join_body, level)}"
        )
        if node.timeout is not None:
            text += (
                f" timeout ({self.visit(node.timeout.expression)}) "
                f"({self.visit_parameter(node.timeout.parameter)}) {self._block(node.timeout.body, level)}"
            )
        return text

    def visit_transaction(self, node: Transaction, level: int) -> str:
        text = f"{INDENT * level}transaction {self._block(node.body, level)}"
        for keyword, body in (
            ("failed", node.failed_body),
            ("aborted", node.aborted_body),
            ("committed", node.committed_body),
        ):
            if body is not None:
                text += f" {keyword} {self._block(body, level)}"
        return text

    def visit_worker_invocation(self, node: WorkerInvocation, level: int) -> str:
        return f"{INDENT * level}{self.visit_variable_reference_list(node.references)} -> {node.worker};"

    def visit_worker_reply(self, node: WorkerReply, level: int) -> str:
        return f"{INDENT * level}{self.visit_variable_reference_list(node.references)} <- {node.worker};"


def generate_source(node) -> str:
    """
    Función pública para generar el texto de un nodo.

    Args:
        node: Cualquier nodo devuelto por el parser de fragmentos

    Returns:
        str: Código fuente con formato canónico
    """
    return SourceGenerator().generate(node)
