"""Jerarquía de errores del parser de fragmentos.

Cada excepción declara la fase (`phase`) y el código (`code`) con los que se
reporta al cliente; la fachada las convierte en valores (`FragmentError`).
"""


class FragmentParserError(Exception):
    """Raíz de los errores del parser de fragmentos."""

    phase = "internal"
    code = "internal_error"


# ERRORES DE CONFIGURACIÓN (errores de programación)

class ConfigError(FragmentParserError):
    phase = "config"
    code = "config_error"


class UnknownKindError(ConfigError):
    """El tipo de fragmento no existe o no tiene plantilla asociada."""

    code = "unknown_kind"


class PlaceholderMissingError(ConfigError):
    """Una plantilla no contiene exactamente un `$FRAGMENT`."""

    code = "placeholder_missing"


# ERRORES DE PARSING

class ParseCancelledError(FragmentParserError):
    """El host canceló la invocación del parser (timeout, apagado, ...)."""

    phase = "parse"
    code = "cancelled"


# ERRORES DE EXTRACCIÓN

class ExtractionError(FragmentParserError):
    phase = "extract"
    code = "extraction_error"


class NodeNotFoundError(ExtractionError):
    """El árbol no tiene la forma que espera el extractor."""

    code = "node_not_found"


class EmptyFragmentError(ExtractionError):
    """La posición esperada no contiene ningún nodo."""

    code = "empty"
