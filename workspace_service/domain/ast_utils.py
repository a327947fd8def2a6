from typing import Callable, Iterator, Optional

from pydantic import BaseModel

from .ast_models import SrcLoc


def map_locations(node, fn: Callable[[SrcLoc], Optional[SrcLoc]]):
    """
    Copia profunda de un nodo aplicando `fn` a cada SrcLoc del subárbol.

    El nodo original no se modifica.
    """
    if isinstance(node, SrcLoc):
        return fn(node)
    if isinstance(node, BaseModel):
        update = {}
        for name in type(node).model_fields:
            value = getattr(node, name)
            if value is None or isinstance(value, (str, int, bool)):
                continue
            update[name] = map_locations(value, fn)
        return node.model_copy(update=update)
    if isinstance(node, list):
        return [map_locations(item, fn) for item in node]
    return node


def strip_locations(node):
    """Copia del subárbol sin información de ubicación (para comparar estructura)."""
    return map_locations(node, lambda _loc: None)


def iter_locations(node) -> Iterator[SrcLoc]:
    if isinstance(node, SrcLoc):
        yield node
    elif isinstance(node, BaseModel):
        for name in type(node).model_fields:
            yield from iter_locations(getattr(node, name))
    elif isinstance(node, list):
        for item in node:
            yield from iter_locations(item)


def span(first: Optional[SrcLoc], last: Optional[SrcLoc]) -> Optional[SrcLoc]:
    """Rango que va del inicio de `first` al final de `last`."""
    if first is None or last is None:
        return first or last
    return SrcLoc(
        line=first.line,
        column=first.column,
        offset=first.offset,
        end_line=last.end_line,
        end_column=last.end_column,
        end_offset=last.end_offset,
    )
