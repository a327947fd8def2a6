"""Configuración centralizada de logging.

Un único handler de consola sobre el logger raíz; los módulos obtienen su
logger con `logging.getLogger(__name__)`.
"""

import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configura el logger raíz con salida a consola.

    Args:
        level: Nombre del nivel ("DEBUG", "INFO", ...)

    Returns:
        El logger raíz configurado.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Evitar handlers duplicados si la app se crea varias veces (tests)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    return root_logger
