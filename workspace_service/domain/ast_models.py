"""Modelos del Árbol de Sintaxis Abstracta (AST).

Define las clases Pydantic que representan la estructura del AST del
subconjunto de Ballerina que maneja el composer:
- SrcLoc: ubicación en código fuente
- Tipos y parámetros: TypeName, Parameter, ParameterList
- Expresiones: BasicLiteral, referencias, Invocation, UnaryExpression, ...
- Sentencias: VariableDefinition, Assignment, IfElse, ForkJoin, Transaction, ...
- Funciones: Function, Program

Cada nodo lleva un discriminador `kind` para que la representación JSON
pueda ser consumida directamente por el editor.
"""

from typing import List, Optional, Union, Literal
from pydantic import BaseModel, Field as PydField


# UBICACIÓN EN CÓDIGO FUENTE

class SrcLoc(BaseModel):
    """
    Representa un rango en el código fuente.

    Atributos:
        line (int): línea de inicio (1-based).
        column (int): columna de inicio (1-based).
        offset (int): desplazamiento de inicio en caracteres (0-based).
        end_line (int): línea de fin (1-based).
        end_column (int): columna de fin, exclusiva (1-based).
        end_offset (int): desplazamiento de fin, exclusivo (0-based).
    """
    line: int
    column: int
    offset: int
    end_line: int
    end_column: int
    end_offset: int


class NodeWithLoc(BaseModel):
    """
    Clase base para nodos que incluyen ubicación opcional (`loc`).
    """
    loc: Optional[SrcLoc] = None


# ---------------------------------------------------------------------------
# 1. TIPOS Y PARÁMETROS
# ---------------------------------------------------------------------------

class TypeName(NodeWithLoc):
    """
    Nombre de tipo, opcionalmente calificado por paquete.

    Ejemplos:
        int            →  TypeName(name="int")
        string[][]     →  TypeName(name="string", dimensions=2)
        map<json>      →  TypeName(name="map", constraint=TypeName(name="json"))
        http:Request   →  TypeName(package="http", name="Request")
    """
    kind: Literal["type_name"] = "type_name"
    name: str
    package: Optional[str] = None
    constraint: Optional["TypeName"] = None
    dimensions: int = 0


class Parameter(NodeWithLoc):
    """Parámetro de función (los de retorno pueden no tener nombre)."""
    kind: Literal["parameter"] = "parameter"
    type_name: TypeName
    name: Optional[str] = None
    name_loc: Optional[SrcLoc] = None


class ParameterList(NodeWithLoc):
    """Lista de parámetros de entrada o de retorno."""
    kind: Literal["parameter_list"] = "parameter_list"
    parameters: List[Parameter] = PydField(default_factory=list)


# ---------------------------------------------------------------------------
# 2. EXPRESIONES
# ---------------------------------------------------------------------------

class BasicLiteral(NodeWithLoc):
    """
    Literal básico. `value` conserva el texto fuente (sin comillas en
    el caso de las cadenas, con los escapes intactos).
    """
    kind: Literal["basic_literal"] = "basic_literal"
    literal_type: Literal["int", "float", "string", "boolean", "null"]
    value: str


class SimpleReference(NodeWithLoc):
    """Referencia a una variable por nombre."""
    kind: Literal["simple_reference"] = "simple_reference"
    name: str


class FieldReference(NodeWithLoc):
    """Acceso a un campo: base.field"""
    kind: Literal["field_reference"] = "field_reference"
    base: "VariableReference"
    field: str


class IndexReference(NodeWithLoc):
    """Acceso indexado: base[index]"""
    kind: Literal["index_reference"] = "index_reference"
    base: "VariableReference"
    index: "Expression"


# Aliases para tipos expresivos
VariableReference = Union[SimpleReference, FieldReference, IndexReference]


class Invocation(NodeWithLoc):
    """Invocación de función, opcionalmente calificada: pkg:fn(args)."""
    kind: Literal["invocation"] = "invocation"
    name: str
    package: Optional[str] = None
    arguments: List["Expression"] = PydField(default_factory=list)


class UnaryExpression(NodeWithLoc):
    """Operador unario (-, +, !)."""
    kind: Literal["unary_expression"] = "unary_expression"
    op: str
    operand: "Expression"


class BinaryExpression(NodeWithLoc):
    """Operador binario (+, -, *, /, %, <, ==, &&, ||, etc.)."""
    kind: Literal["binary_expression"] = "binary_expression"
    op: str
    left: "Expression"
    right: "Expression"


class ArrayLiteral(NodeWithLoc):
    kind: Literal["array_literal"] = "array_literal"
    items: List["Expression"] = PydField(default_factory=list)


class MapEntry(NodeWithLoc):
    """Par clave/valor de un literal de mapa. `quoted` indica clave entre comillas."""
    kind: Literal["map_entry"] = "map_entry"
    key: str
    quoted: bool = False
    value: "Expression"


class MapLiteral(NodeWithLoc):
    kind: Literal["map_literal"] = "map_literal"
    entries: List[MapEntry] = PydField(default_factory=list)


# Conjunto total de expresiones válidas
Expression = Union[
    BasicLiteral, SimpleReference, FieldReference, IndexReference,
    Invocation, UnaryExpression, BinaryExpression, ArrayLiteral, MapLiteral,
]


# ---------------------------------------------------------------------------
# 3. SENTENCIAS
# ---------------------------------------------------------------------------

class Block(NodeWithLoc):
    """Bloque de sentencias { ... }."""
    kind: Literal["block"] = "block"
    statements: List["Statement"] = PydField(default_factory=list)


class VariableDefinition(NodeWithLoc):
    """Definición de variable: <tipo> <nombre> [= <expresión>];"""
    kind: Literal["variable_definition"] = "variable_definition"
    type_name: TypeName
    name: str
    name_loc: Optional[SrcLoc] = None
    initializer: Optional[Expression] = None


class VariableReferenceList(NodeWithLoc):
    """Lado izquierdo de una asignación: a, b.c, d[0]"""
    kind: Literal["variable_reference_list"] = "variable_reference_list"
    references: List[VariableReference] = PydField(default_factory=list)


class Assignment(NodeWithLoc):
    """Asignación: [var] <referencias> = <expresión>;"""
    kind: Literal["assignment"] = "assignment"
    declare: bool = False
    targets: VariableReferenceList
    expression: Expression


class ExpressionStatement(NodeWithLoc):
    """Invocación usada como sentencia."""
    kind: Literal["expression_statement"] = "expression_statement"
    expression: Invocation


class ElseIf(NodeWithLoc):
    kind: Literal["else_if"] = "else_if"
    condition: Expression
    body: Block


class IfElse(NodeWithLoc):
    """Condicional if / else if / else."""
    kind: Literal["if_else"] = "if_else"
    condition: Expression
    then_body: Block
    else_ifs: List[ElseIf] = PydField(default_factory=list)
    else_body: Optional[Block] = None


class While(NodeWithLoc):
    kind: Literal["while"] = "while"
    condition: Expression
    body: Block


class Break(NodeWithLoc):
    kind: Literal["break"] = "break"


class Next(NodeWithLoc):
    kind: Literal["next"] = "next"


class Return(NodeWithLoc):
    kind: Literal["return"] = "return"
    expressions: List[Expression] = PydField(default_factory=list)


class Reply(NodeWithLoc):
    kind: Literal["reply"] = "reply"
    expression: Expression


class Throw(NodeWithLoc):
    kind: Literal["throw"] = "throw"
    expression: Expression


class Retry(NodeWithLoc):
    """Sentencia retry dentro de la cláusula failed de una transacción."""
    kind: Literal["retry"] = "retry"
    count: Expression


class Catch(NodeWithLoc):
    kind: Literal["catch"] = "catch"
    type_name: TypeName
    name: str
    body: Block


class TryCatch(NodeWithLoc):
    kind: Literal["try_catch"] = "try_catch"
    try_body: Block
    catches: List[Catch] = PydField(default_factory=list)
    finally_body: Optional[Block] = None


class Worker(NodeWithLoc):
    kind: Literal["worker"] = "worker"
    name: str
    body: Block


class JoinCondition(NodeWithLoc):
    """
    Condición de join de un fork.

    Ejemplos:
        all             →  JoinCondition(condition_type="all")
        some 1 w1, w2   →  JoinCondition(condition_type="some", count=1, workers=["w1", "w2"])
    """
    kind: Literal["join_condition"] = "join_condition"
    condition_type: Literal["all", "some"]
    count: Optional[int] = None
    workers: List[str] = PydField(default_factory=list)


class Timeout(NodeWithLoc):
    kind: Literal["timeout"] = "timeout"
    expression: Expression
    parameter: Parameter
    body: Block


class ForkJoin(NodeWithLoc):
    """fork { workers } join (condición) (tipo nombre) { ... } [timeout ...]"""
    kind: Literal["fork_join"] = "fork_join"
    workers: List[Worker] = PydField(default_factory=list)
    join_condition: Optional[JoinCondition] = None
    join_parameter: Parameter
    join_body: Block
    timeout: Optional[Timeout] = None


class Transaction(NodeWithLoc):
    """transaction { } failed { } aborted { } committed { }"""
    kind: Literal["transaction"] = "transaction"
    body: Block
    failed_body: Optional[Block] = None
    aborted_body: Optional[Block] = None
    committed_body: Optional[Block] = None


class WorkerInvocation(NodeWithLoc):
    """Envío a un worker: a, b -> w1;"""
    kind: Literal["worker_invocation"] = "worker_invocation"
    references: VariableReferenceList
    worker: str


class WorkerReply(NodeWithLoc):
    """Recepción desde un worker: a, b <- w1;"""
    kind: Literal["worker_reply"] = "worker_reply"
    references: VariableReferenceList
    worker: str


# Tipo unión de todas las sentencias válidas
Statement = Union[
    VariableDefinition, Assignment, ExpressionStatement, IfElse, While,
    Break, Next, Return, Reply, Throw, Retry, TryCatch, ForkJoin,
    Transaction, WorkerInvocation, WorkerReply,
]


# FUNCIONES Y PROGRAMA

class Function(NodeWithLoc):
    """
    Definición de función.

    Atributos:
        name (str): nombre de la función.
        parameters (ParameterList): parámetros de entrada (posiblemente vacía).
        return_parameters (Optional[ParameterList]): parámetros de retorno.
        body (Block): cuerpo de la función.
    """
    kind: Literal["function"] = "function"
    name: str
    parameters: ParameterList = PydField(default_factory=ParameterList)
    return_parameters: Optional[ParameterList] = None
    body: Block = PydField(default_factory=Block)


class Program(NodeWithLoc):
    """Nodo raíz: unidad de compilación con sus funciones."""
    kind: Literal["program"] = "program"
    functions: List[Function] = PydField(default_factory=list)


# Lo que puede devolver la extracción de un fragmento
FragmentNode = Union[
    Statement, Expression, Block, ParameterList, JoinCondition,
    VariableReferenceList,
]


# RECONSTRUCCIÓN DE REFERENCIAS CIRCULARES

# Pydantic requiere este paso para resolver forward refs
for _M in (
        TypeName, FieldReference, IndexReference, Invocation, UnaryExpression,
        BinaryExpression, ArrayLiteral, MapEntry, MapLiteral, Block,
        VariableDefinition, VariableReferenceList, Assignment,
        ExpressionStatement, ElseIf, IfElse, While, Return, Reply, Throw,
        Retry, Catch, TryCatch, Worker, Timeout, ForkJoin, Transaction,
        WorkerInvocation, WorkerReply, Function, Program,
):
    _M.model_rebuild()
