"""
fragments.py — Tipos de fragmento y plantillas de envoltura
===========================================================

Un fragmento (sentencia, expresión, lista de parámetros, ...) no es un
programa completo, así que no puede parsearse por sí mismo. Cada tipo tiene
una plantilla: un programa completo con un único marcador `$FRAGMENT` en una
posición gramaticalmente válida para ese tipo.

Las plantillas se comparan byte a byte con las del editor; no tocar los
saltos de línea, el rebase de posiciones depende de la longitud exacta del
prefijo.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from .errors import UnknownKindError


PLACEHOLDER = "$FRAGMENT"


class FragmentKind(str, Enum):
    """Tipos de fragmento aceptados (las etiquetas son las del editor)."""

    STATEMENT = "statement"
    EXPRESSION = "expression"
    JOIN_CONDITION = "join-condition"
    ARGUMENT_PARAMETER_LIST = "argument_parameter_definitions"
    RETURN_PARAMETER_LIST = "return_parameter_definitions"
    TRANSACTION_FAILED_BLOCK = "transaction_failed"
    VARIABLE_REFERENCE_LIST = "variable_reference_list"

    @classmethod
    def from_tag(cls, tag: Union[str, "FragmentKind"]) -> "FragmentKind":
        """
        Resuelve una etiqueta textual a su FragmentKind.

        Raises:
            UnknownKindError: si la etiqueta no corresponde a ningún tipo
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownKindError(f"unknown fragment kind: {tag!r}") from None


# ============================================================================
# PLANTILLAS
# ============================================================================

TEMPLATES: Mapping[FragmentKind, str] = MappingProxyType({
    FragmentKind.STATEMENT: "function testFunction(){\n$FRAGMENT\n}",
    FragmentKind.EXPRESSION: "function testFunction(){any val =\n$FRAGMENT;\n}",
    FragmentKind.JOIN_CONDITION: "function testFunction(){fork{}join($FRAGMENT)(map param){}}",
    FragmentKind.ARGUMENT_PARAMETER_LIST: "function testFunction($FRAGMENT){\n}",
    FragmentKind.RETURN_PARAMETER_LIST: "function testFunction()($FRAGMENT){\n}",
    FragmentKind.TRANSACTION_FAILED_BLOCK: (
        "function testFunction(){transaction{}failed{$FRAGMENT}aborted{}committed{}}"
    ),
    FragmentKind.VARIABLE_REFERENCE_LIST: "function testFunction(){\n$FRAGMENT=testFunction();\n}",
})


def template_for(
    kind: Union[str, FragmentKind],
    templates: Mapping[FragmentKind, str] = TEMPLATES,
) -> str:
    """
    Devuelve la plantilla de envoltura de un tipo de fragmento.

    Args:
        kind: FragmentKind o su etiqueta textual
        templates: Tabla de plantillas (por defecto la del módulo)

    Raises:
        UnknownKindError: si el tipo no existe o no tiene plantilla
    """
    kind = FragmentKind.from_tag(kind)
    try:
        return templates[kind]
    except KeyError:
        raise UnknownKindError(f"no wrapper template registered for {kind.value!r}") from None
