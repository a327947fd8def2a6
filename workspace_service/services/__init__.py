"""Services layer - Business logic orchestration."""

from .ast_builder import BuildAST, build_ast_from_tree
from .parse_driver import ParseDriver, ProgramParser
from .fragment_wrapper import WrappedProgram, wrap
from .fragment_extractor import Extraction, FragmentExtractor
from .fragment_parser import FragmentParser, get_fragment_parser
from .source_gen import SourceGenerator, generate_source

__all__ = [
    "BuildAST",
    "build_ast_from_tree",
    "ParseDriver",
    "ProgramParser",
    "WrappedProgram",
    "wrap",
    "Extraction",
    "FragmentExtractor",
    "FragmentParser",
    "get_fragment_parser",
    "SourceGenerator",
    "generate_source",
]
