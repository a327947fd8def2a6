"""
grammar_loader.py — Carga de la gramática del lenguaje
======================================================

Las gramáticas `.lark` viajan como datos del paquete, en `grammar/`.
"""

from functools import lru_cache
from pathlib import Path


GRAMMAR_DIR = Path(__file__).parents[1] / "grammar"
DEFAULT_GRAMMAR = "ballerina"


class GrammarLoader:
    """Lectura (cacheada) del texto de una gramática por nombre."""

    @staticmethod
    def path_for(name: str = DEFAULT_GRAMMAR) -> Path:
        return GRAMMAR_DIR / f"{name}.lark"

    @classmethod
    @lru_cache(maxsize=None)
    def load(cls, name: str = DEFAULT_GRAMMAR) -> str:
        """
        Devuelve el texto de `grammar/<name>.lark`.

        Raises:
            FileNotFoundError: si el paquete no incluye esa gramática
        """
        path = cls.path_for(name)
        if not path.is_file():
            raise FileNotFoundError(f"Grammar {name!r} not found at {path}")
        return path.read_text(encoding="utf-8")
