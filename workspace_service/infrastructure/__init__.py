# ============================================================================
# workspace_service/infrastructure/__init__.py
# ============================================================================
"""
Infrastructure layer - External dependencies (Lark, file I/O)
"""

from .grammar_loader import GrammarLoader
from .lark_parser import BallerinaParser, get_parser

__all__ = ["GrammarLoader", "BallerinaParser", "get_parser"]
