"""
Domain layer - Modelos del AST, tipos de fragmento y valores de resultado
"""

from .ast_models import *  # noqa: F401,F403
from .errors import (
    FragmentParserError,
    ConfigError,
    UnknownKindError,
    PlaceholderMissingError,
    ParseCancelledError,
    ExtractionError,
    NodeNotFoundError,
    EmptyFragmentError,
)
from .fragments import PLACEHOLDER, TEMPLATES, FragmentKind, template_for
from .results import ParseFailure, FragmentError, FragmentWarning, FragmentResult
from .ast_utils import map_locations, strip_locations, iter_locations, span

__all__ = [
    "FragmentParserError", "ConfigError", "UnknownKindError",
    "PlaceholderMissingError", "ParseCancelledError", "ExtractionError",
    "NodeNotFoundError", "EmptyFragmentError",
    "PLACEHOLDER", "TEMPLATES", "FragmentKind", "template_for",
    "ParseFailure", "FragmentError", "FragmentWarning", "FragmentResult",
    "map_locations", "strip_locations", "iter_locations", "span",
]
