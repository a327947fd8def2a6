"""
parse_driver.py — Adaptador del parser del lenguaje completo
============================================================

Responsabilidad: pasar un programa completo por el parser y devolver el AST
del dominio o un `ParseFailure`. Sin reintentos ni resultados parciales.
"""

import logging
from typing import Callable, Optional, Union

from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from ..domain.ast_models import Program
from ..domain.results import ParseFailure
from ..infrastructure.lark_parser import BallerinaParser, get_parser
from .ast_builder import build_ast_from_tree


logger = logging.getLogger(__name__)

# Contrato que consume la fachada: texto completo → Program | ParseFailure
ProgramParser = Callable[[str], Union[Program, ParseFailure]]


class ParseDriver:
    """
    Parser de programas completos.

    Flujo:
    1. Parser LALR (Lark) → parse tree
    2. Transformer BuildAST → AST dominio

    Los errores de sintaxis se devuelven como valor; cualquier otra
    excepción es un error interno y se propaga.
    """

    def __init__(self, parser: Optional[BallerinaParser] = None):
        self.parser = parser or get_parser()

    def parse(self, source: str) -> Union[Program, ParseFailure]:
        try:
            tree = self.parser.parse(source)
        except UnexpectedInput as e:
            failure = self._failure_from(e)
            logger.debug("Syntax error at offset %s: %s", failure.offset, failure.message)
            return failure

        return build_ast_from_tree(tree)

    __call__ = parse

    def _failure_from(self, error: UnexpectedInput) -> ParseFailure:
        """Mensaje sin posiciones: las coordenadas van en campos aparte."""
        if isinstance(error, UnexpectedToken):
            found = self.parser.describe_terminal(error.token.type)
            if error.token.type != "$END":
                found = repr(str(error.token))
            message = f"unexpected {found}"
            expected = sorted(self.parser.describe_terminal(t) for t in (error.accepts or error.expected))
            if expected:
                message += f", expected one of: {', '.join(expected)}"
        elif isinstance(error, UnexpectedCharacters):
            message = f"unexpected character {error.char!r}"
        elif isinstance(error, UnexpectedEOF):
            message = "unexpected end of input"
        else:
            message = str(error)

        return ParseFailure(
            message=message,
            line=_position(getattr(error, "line", None), minimum=1),
            column=_position(getattr(error, "column", None), minimum=1),
            offset=_position(getattr(error, "pos_in_stream", None), minimum=0),
        )


def _position(value, minimum: int) -> Optional[int]:
    # Lark usa -1 o '?' cuando no conoce la posición
    if isinstance(value, int) and value >= minimum:
        return value
    return None
