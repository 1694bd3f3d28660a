"""
Parsing Layer

Tree-sitter based parsing of Java sources into declaration trees.

Components:
- parser_registry: Grammar loading, per-thread parsers
- source_file: Source file representation
- java_extractor: tree-sitter tree -> ParsedFile
- file_discovery: *.java enumeration
- arena: parse-once outcomes shared by all passes
"""

from codegraph_leakscan.parsing.arena import (
    FailureReason,
    ParsedArena,
    ParseFailure,
    ParseOutcome,
    parse_file,
    parse_source_tree,
)
from codegraph_leakscan.parsing.file_discovery import discover_java_files
from codegraph_leakscan.parsing.java_extractor import JavaDeclarationExtractor
from codegraph_leakscan.parsing.parser_registry import ParserRegistry, get_registry
from codegraph_leakscan.parsing.source_file import SourceFile

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "JavaDeclarationExtractor",
    "discover_java_files",
    "FailureReason",
    "ParseFailure",
    "ParseOutcome",
    "ParsedArena",
    "parse_file",
    "parse_source_tree",
]
