"""Configuración y gestión del parser LALR.

Responsabilidad: configurar Lark y parsear texto a parse tree.
"""

from functools import lru_cache

from lark import Lark, Tree

from .grammar_loader import GrammarLoader


class LarkParserConfig:
    """Configuración del parser LALR."""

    START = "program"
    PARSER = "lalr"
    LEXER = "contextual"
    PROPAGATE_POSITIONS = True
    MAYBE_PLACEHOLDERS = True


class BallerinaParser:
    """Parser del lenguaje completo basado en Lark.

    Singleton pattern para evitar recargar la gramática. Una instancia de
    Lark LALR no guarda estado entre llamadas a `parse`, así que puede
    compartirse entre hilos.
    """

    _instance = None
    _parser = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize_parser()
        return cls._instance

    def _initialize_parser(self) -> None:
        """Inicializa el parser Lark con la gramática cargada."""
        grammar = GrammarLoader.load()

        self._parser = Lark(
            grammar,
            start=LarkParserConfig.START,
            parser=LarkParserConfig.PARSER,
            lexer=LarkParserConfig.LEXER,
            propagate_positions=LarkParserConfig.PROPAGATE_POSITIONS,
            maybe_placeholders=LarkParserConfig.MAYBE_PLACEHOLDERS,
        )

    def parse(self, code: str) -> Tree:
        """Parsea un programa completo a parse tree.

        Args:
            code: Código fuente de una unidad de compilación

        Returns:
            Lark Tree

        Raises:
            UnexpectedInput: Si hay errores de sintaxis (la posición del
                error va en la excepción)
        """
        return self._parser.parse(code)

    def describe_terminal(self, name: str) -> str:
        """Texto legible de un terminal para mensajes de error ("';'", "NAME")."""
        if name == "$END":
            return "end of input"
        try:
            terminal = self._parser.get_terminal(name)
        except KeyError:
            return name
        if terminal.pattern.type == "str":
            return repr(terminal.pattern.value)
        return name


@lru_cache(maxsize=1)
def get_parser() -> BallerinaParser:
    """Factory function para obtener instancia singleton del parser."""
    return BallerinaParser()
