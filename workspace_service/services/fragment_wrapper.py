"""
fragment_wrapper.py — Envoltura de fragmentos en programas completos
===================================================================

Responsabilidad: sustituir el marcador de la plantilla por el texto del
fragmento, sin escapar, recortar ni normalizar nada, y recordar dónde quedó
el fragmento dentro del programa para poder rebasar posiciones después.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

from ..domain.ast_models import SrcLoc
from ..domain.errors import PlaceholderMissingError
from ..domain.fragments import PLACEHOLDER, TEMPLATES, FragmentKind, template_for


@dataclass(frozen=True)
class WrappedProgram:
    """
    Programa envuelto: prefijo de plantilla + fragmento + sufijo.

    Atributos:
        kind: Tipo del fragmento
        prefix: Texto de la plantilla antes del marcador
        fragment: Texto del fragmento, tal cual lo envió el cliente
        suffix: Texto de la plantilla después del marcador
    """
    kind: FragmentKind
    prefix: str
    fragment: str
    suffix: str

    @property
    def source(self) -> str:
        return self.prefix + self.fragment + self.suffix

    @property
    def fragment_start(self) -> int:
        return len(self.prefix)

    @property
    def fragment_end(self) -> int:
        return len(self.prefix) + len(self.fragment)

    # ------------------------------------------------------------------------
    # COORDENADAS DEL FRAGMENTO
    # ------------------------------------------------------------------------

    def to_fragment_offset(self, offset: Optional[int]) -> int:
        """
        Convierte un offset del programa envuelto a offset del fragmento.

        Lo que cae en el prefijo se ajusta a 0 y lo que cae en el sufijo (o
        un offset desconocido, p. ej. fin de entrada) al final del fragmento.
        """
        if offset is None or offset < 0:
            return len(self.fragment)
        return min(max(offset - self.fragment_start, 0), len(self.fragment))

    def position_at(self, fragment_offset: int) -> Tuple[int, int]:
        """(línea, columna) 1-based de un offset del fragmento como documento propio."""
        line = self.fragment.count("\n", 0, fragment_offset) + 1
        line_start = self.fragment.rfind("\n", 0, fragment_offset) + 1
        return line, fragment_offset - line_start + 1

    def rebase(self, loc: SrcLoc) -> SrcLoc:
        """Traslada un SrcLoc del programa envuelto a coordenadas del fragmento."""
        start = self.to_fragment_offset(loc.offset)
        end = max(self.to_fragment_offset(loc.end_offset), start)
        line, column = self.position_at(start)
        end_line, end_column = self.position_at(end)
        return SrcLoc(
            line=line,
            column=column,
            offset=start,
            end_line=end_line,
            end_column=end_column,
            end_offset=end,
        )


def wrap(
    kind: Union[str, FragmentKind],
    fragment_text: str,
    templates: Mapping[FragmentKind, str] = TEMPLATES,
) -> WrappedProgram:
    """
    Envuelve un fragmento en la plantilla de su tipo.

    El resultado nunca se vuelve a escanear: un fragmento que contenga el
    texto `$FRAGMENT` se inserta sin cambios.

    Raises:
        UnknownKindError: si el tipo no tiene plantilla
        PlaceholderMissingError: si la plantilla no tiene exactamente un marcador
    """
    kind = FragmentKind.from_tag(kind)
    template = template_for(kind, templates)

    occurrences = template.count(PLACEHOLDER)
    if occurrences != 1:
        raise PlaceholderMissingError(
            f"template for {kind.value!r} has {occurrences} placeholders, expected exactly 1"
        )

    prefix, suffix = template.split(PLACEHOLDER)
    return WrappedProgram(kind=kind, prefix=prefix, fragment=fragment_text, suffix=suffix)
