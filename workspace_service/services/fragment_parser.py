"""
fragment_parser.py — Fachada del parser de fragmentos
=====================================================

Responsabilidad: orquestar el flujo completo envolver → parsear → extraer.

Flujo:
1. Resolver la plantilla del tipo (error de configuración si no existe)
2. Envolver el fragmento
3. Parsear el programa envuelto (error de sintaxis rebasado al fragmento)
4. Extraer el subárbol del fragmento

Se devuelve el primer error encontrado; los pasos siguientes no se intentan.
"""

import logging
from functools import lru_cache
from typing import Mapping, Optional, Union

from ..domain.errors import ConfigError, ExtractionError, NodeNotFoundError, ParseCancelledError
from ..domain.fragments import TEMPLATES, FragmentKind
from ..domain.results import FragmentResult, ParseFailure
from .fragment_extractor import FragmentExtractor
from .fragment_wrapper import WrappedProgram, wrap
from .parse_driver import ParseDriver, ProgramParser


logger = logging.getLogger(__name__)


class FragmentParser:
    """
    Punto de entrada único del parser de fragmentos.

    No guarda estado mutable: una misma instancia puede usarse desde varios
    hilos a la vez. El parser del lenguaje completo se inyecta; por defecto
    se usa `ParseDriver` sobre la gramática de Lark.
    """

    def __init__(
        self,
        parse_program: Optional[ProgramParser] = None,
        templates: Mapping[FragmentKind, str] = TEMPLATES,
        extractor: Optional[FragmentExtractor] = None,
    ):
        self.parse_program = parse_program or ParseDriver()
        self.templates = templates
        self.extractor = extractor or FragmentExtractor()

    def parse_fragment(self, kind: Union[str, FragmentKind], text: str) -> FragmentResult:
        """
        Parsea un fragmento como si fuera un documento independiente.

        Args:
            kind: FragmentKind o su etiqueta textual ("statement", ...)
            text: Texto del fragmento, se inserta sin modificar

        Returns:
            FragmentResult con `ok` o `error` (nunca ambos)
        """
        # Paso 1 y 2: plantilla y envoltura
        try:
            wrapped = wrap(kind, text, self.templates)
        except ConfigError as e:
            logger.error("Fragment parser misconfigured for kind %r: %s", kind, e)
            return FragmentResult.failure(e)

        # Paso 3: parser del lenguaje completo
        try:
            outcome = self.parse_program(wrapped.source)
        except ParseCancelledError as e:
            logger.info("Parsing of %s fragment cancelled: %s", wrapped.kind.value, e)
            return FragmentResult.failure(e)

        if isinstance(outcome, ParseFailure):
            return self._parse_failure(wrapped, outcome)

        # Paso 4: extracción
        try:
            extraction = self.extractor.extract(wrapped, outcome)
        except NodeNotFoundError as e:
            logger.error("Parser/extractor mismatch for %s fragment: %s", wrapped.kind.value, e)
            return FragmentResult.failure(e)
        except ExtractionError as e:
            logger.debug("Extraction of %s fragment failed: %s", wrapped.kind.value, e)
            return FragmentResult.failure(e)
        except ConfigError as e:
            logger.error("Fragment parser misconfigured for kind %r: %s", kind, e)
            return FragmentResult.failure(e)

        logger.debug("Parsed %s fragment into %s", wrapped.kind.value, extraction.node.kind)
        return FragmentResult.success(extraction.node, extraction.warnings)

    @staticmethod
    def _parse_failure(wrapped: WrappedProgram, failure: ParseFailure) -> FragmentResult:
        """Error de sintaxis con la posición en coordenadas del fragmento."""
        offset = wrapped.to_fragment_offset(failure.offset)
        line, column = wrapped.position_at(offset)
        logger.debug(
            "Syntax error in %s fragment at %d:%d: %s",
            wrapped.kind.value, line, column, failure.message,
        )
        return FragmentResult.model_validate({
            "error": {
                "phase": "parse",
                "code": "syntax_error",
                "message": failure.message,
                "line": line,
                "column": column,
            },
        })


# Instancia compartida para uso en routes
@lru_cache(maxsize=1)
def get_fragment_parser() -> FragmentParser:
    """Factory para obtener la instancia compartida de la fachada."""
    return FragmentParser()
