"""Valores de resultado del parser de fragmentos.

Los errores viajan como datos: `FragmentResult` lleva exactamente uno de
`ok` / `error`, más advertencias no fatales.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .ast_models import FragmentNode
from .errors import FragmentParserError


class ParseFailure(BaseModel):
    """
    Error de sintaxis reportado por el parser del lenguaje completo.

    Las posiciones están en coordenadas del programa envuelto; la fachada
    las rebasa al fragmento antes de exponerlas.
    """
    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    offset: Optional[int] = None


class FragmentError(BaseModel):
    """
    Error expuesto al cliente.

    Atributos:
        phase: fase en la que falló ("config" | "parse" | "extract").
        code: identificador estable del error.
        message: descripción legible.
        line, column: posición relativa al fragmento (1-based), si aplica.
    """
    phase: Literal["config", "parse", "extract", "internal"]
    code: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None


class FragmentWarning(BaseModel):
    code: str
    message: str


class FragmentResult(BaseModel):
    """Resultado estructurado de `FragmentParser.parse_fragment`."""
    ok: Optional[FragmentNode] = None
    error: Optional[FragmentError] = None
    warnings: List[FragmentWarning] = Field(default_factory=list)

    @classmethod
    def success(cls, node, warnings: Optional[List[FragmentWarning]] = None) -> "FragmentResult":
        return cls(ok=node, warnings=list(warnings or []))

    @classmethod
    def failure(
        cls,
        exc: FragmentParserError,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "FragmentResult":
        """Convierte una excepción del parser de fragmentos en resultado."""
        return cls(error=FragmentError(
            phase=exc.phase,
            code=exc.code,
            message=str(exc),
            line=line,
            column=column,
        ))

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def to_payload(self) -> Dict[str, Any]:
        """Forma serializable {ok, error, warnings}."""
        return self.model_dump()
