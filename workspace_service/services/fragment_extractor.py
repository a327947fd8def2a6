"""
fragment_extractor.py — Extracción del subárbol del fragmento
=============================================================

Responsabilidad: dado el AST del programa envuelto, localizar el nodo que
corresponde al fragmento original, separarlo del contexto sintético de la
plantilla y rebasar sus posiciones a coordenadas del fragmento.

Navegación por tipo (siempre sobre `functions[0]`):

    statement                       body.statements (uno → sentencia, varios → Block)
    expression                      body.statements[0].initializer
    join-condition                  body.statements[0].join_condition
    argument_parameter_definitions  parameters
    return_parameter_definitions    return_parameters
    transaction_failed              (primer Transaction).failed_body
    variable_reference_list         body.statements[0].targets
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from ..domain.ast_models import (
    Assignment,
    Block,
    ForkJoin,
    Function,
    Program,
    Transaction,
    VariableDefinition,
)
from ..domain.ast_utils import map_locations, span
from ..domain.errors import EmptyFragmentError, NodeNotFoundError, UnknownKindError
from ..domain.fragments import FragmentKind
from ..domain.results import FragmentWarning
from .fragment_wrapper import WrappedProgram


logger = logging.getLogger(__name__)


# Nombre legible de cada tipo para mensajes de "fragmento vacío"
KIND_LABELS: Dict[FragmentKind, str] = {
    FragmentKind.STATEMENT: "statement",
    FragmentKind.EXPRESSION: "expression",
    FragmentKind.JOIN_CONDITION: "join condition",
    FragmentKind.ARGUMENT_PARAMETER_LIST: "argument parameter list",
    FragmentKind.RETURN_PARAMETER_LIST: "return parameter list",
    FragmentKind.TRANSACTION_FAILED_BLOCK: "transaction failed block",
    FragmentKind.VARIABLE_REFERENCE_LIST: "variable reference list",
}


@dataclass
class Extraction:
    """Nodo extraído (ya rebasado) y advertencias no fatales."""
    node: object
    warnings: List[FragmentWarning] = field(default_factory=list)


class FragmentExtractor:
    """Navegación determinista del AST envuelto hasta el nodo del fragmento."""

    def __init__(self):
        self._handlers: Dict[FragmentKind, Callable[[Function, FragmentKind], Tuple[object, List[FragmentWarning]]]] = {
            FragmentKind.STATEMENT: self._statement,
            FragmentKind.EXPRESSION: self._expression,
            FragmentKind.JOIN_CONDITION: self._join_condition,
            FragmentKind.ARGUMENT_PARAMETER_LIST: self._argument_parameters,
            FragmentKind.RETURN_PARAMETER_LIST: self._return_parameters,
            FragmentKind.TRANSACTION_FAILED_BLOCK: self._transaction_failed,
            FragmentKind.VARIABLE_REFERENCE_LIST: self._variable_references,
        }

    def extract(self, wrapped: WrappedProgram, program: Program) -> Extraction:
        """
        Extrae el nodo del fragmento.

        Args:
            wrapped: Programa envuelto (aporta tipo y marco de coordenadas)
            program: AST del programa envuelto

        Returns:
            Extraction con el nodo separado y sus advertencias

        Raises:
            NodeNotFoundError: si el árbol no tiene la forma esperada
            EmptyFragmentError: si la posición esperada está vacía
        """
        handler = self._handlers.get(wrapped.kind)
        if handler is None:
            raise UnknownKindError(f"no extractor registered for {wrapped.kind.value!r}")

        function = self._single_function(program)
        node, warnings = handler(function, wrapped.kind)
        return Extraction(node=map_locations(node, wrapped.rebase), warnings=warnings)

    # ------------------------------------------------------------------------
    # NAVEGACIÓN COMÚN
    # ------------------------------------------------------------------------

    @staticmethod
    def _single_function(program: Program) -> Function:
        if len(program.functions) != 1:
            raise NodeNotFoundError(
                f"expected exactly one function in the wrapped program, found {len(program.functions)}"
            )
        return program.functions[0]

    @staticmethod
    def _first_statement(function: Function, kind: FragmentKind, expected_type):
        statements = function.body.statements
        if not statements:
            raise EmptyFragmentError(f"fragment does not contain a {KIND_LABELS[kind]}")

        first = statements[0]
        if not isinstance(first, expected_type):
            raise NodeNotFoundError(
                f"expected {expected_type.__name__} as first statement, found {first.kind}"
            )
        return first, FragmentExtractor._surplus(function, kind)

    @staticmethod
    def _surplus(function: Function, kind: FragmentKind) -> List[FragmentWarning]:
        extra = len(function.body.statements) - 1
        if extra <= 0:
            return []
        logger.warning("Fragment of kind %s has %d surplus statement(s)", kind.value, extra)
        return [FragmentWarning(
            code="unexpected_surplus",
            message=f"{extra} surplus statement(s) after the {KIND_LABELS[kind]} were ignored",
        )]

    # ------------------------------------------------------------------------
    # EXTRACTORES POR TIPO
    # ------------------------------------------------------------------------

    def _statement(self, function: Function, kind: FragmentKind):
        """Una sentencia se devuelve tal cual; varias, como Block compuesto."""
        statements = function.body.statements
        if not statements:
            raise EmptyFragmentError(f"fragment does not contain a {KIND_LABELS[kind]}")
        if len(statements) == 1:
            return statements[0], []
        return Block(statements=list(statements), loc=span(statements[0].loc, statements[-1].loc)), []

    def _expression(self, function: Function, kind: FragmentKind):
        definition, warnings = self._first_statement(function, kind, VariableDefinition)
        if definition.initializer is None:
            raise NodeNotFoundError("synthesized variable definition has no initializer")
        return definition.initializer, warnings

    def _join_condition(self, function: Function, kind: FragmentKind):
        fork_join, warnings = self._first_statement(function, kind, ForkJoin)
        if fork_join.join_condition is None:
            raise EmptyFragmentError(f"fragment does not contain a {KIND_LABELS[kind]}")
        return fork_join.join_condition, warnings

    def _argument_parameters(self, function: Function, kind: FragmentKind):
        # Una lista de parámetros vacía es válida
        return function.parameters, []

    def _return_parameters(self, function: Function, kind: FragmentKind):
        returns = function.return_parameters
        if returns is None:
            raise NodeNotFoundError("wrapped function has no return parameter clause")
        if not returns.parameters:
            raise EmptyFragmentError(f"fragment does not contain a {KIND_LABELS[kind]}")
        return returns, []

    def _transaction_failed(self, function: Function, kind: FragmentKind):
        transaction = next(
            (s for s in function.body.statements if isinstance(s, Transaction)),
            None,
        )
        if transaction is None or transaction.failed_body is None:
            raise NodeNotFoundError("no transaction with a failed clause in the wrapped program")
        return transaction.failed_body, self._surplus(function, kind)

    def _variable_references(self, function: Function, kind: FragmentKind):
        assignment, warnings = self._first_statement(function, kind, Assignment)
        return assignment.targets, warnings
