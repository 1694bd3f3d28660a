"""
Parser Registry for Tree-sitter

Loads grammars from tree-sitter-language-pack and hands out parsers.
Parsers are cached per thread: a tree-sitter Parser must not be shared
between threads.
"""

import threading

try:
    from tree_sitter import Language, Parser
    from tree_sitter_language_pack import get_language
except ImportError as e:
    raise ImportError(
        "tree-sitter-language-pack is required. " "Install with: pip install tree-sitter tree-sitter-language-pack"
    ) from e

from codegraph_leakscan.exceptions import UnsupportedLanguageError
from codegraph_leakscan.infra.logging import get_logger

logger = get_logger(__name__)


class ParserRegistry:
    """Registry for language parsers (currently Java only)."""

    def __init__(self, languages: tuple[str, ...] = ("java",)):
        self._languages: dict[str, Language] = {}
        self._thread_local = threading.local()
        for name in languages:
            self._register_language(name)

    def _register_language(self, name: str) -> None:
        try:
            self._languages[name] = get_language(name)
            logger.debug("parser_language_loaded", language=name)
        except (LookupError, ValueError, OSError) as e:
            logger.warning("parser_language_unavailable", language=name, error=str(e))

    def get_parser(self, language: str) -> Parser:
        """
        Get this thread's parser for a language.

        Args:
            language: Language name (e.g. "java")

        Returns:
            Parser instance owned by the calling thread

        Raises:
            UnsupportedLanguageError: If no grammar is loaded for the language
        """
        language = language.lower()

        parsers: dict[str, Parser] | None = getattr(self._thread_local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._thread_local.parsers = parsers

        if language not in parsers:
            lang = self._languages.get(language)
            if lang is None:
                raise UnsupportedLanguageError(f"Language not supported: {language}")
            parsers[language] = Parser(lang)
        return parsers[language]


# Global registry instance
_registry: ParserRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = ParserRegistry()
    return _registry
