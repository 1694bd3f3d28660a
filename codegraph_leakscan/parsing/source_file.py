"""
Source File representation
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceFile:
    """
    Represents a source code file.

    Attributes:
        file_path: Path relative to the source root, "/" separated
        content: File content as string
        language: Programming language
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str = "java"
    encoding: str = "utf-8"

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        source_root: str | Path,
        language: str = "java",
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Args:
            file_path: Absolute path, or path relative to source_root
            source_root: Root the reported path is made relative to
            language: Language name
            encoding: File encoding

        Returns:
            SourceFile instance

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid in the given encoding
        """
        file_path = Path(file_path)
        source_root = Path(source_root)

        abs_path = file_path if file_path.is_absolute() else source_root / file_path
        content = abs_path.read_text(encoding=encoding)

        return cls(
            file_path=relative_path(abs_path, source_root),
            content=content,
            language=language,
            encoding=encoding,
        )

    @classmethod
    def from_content(cls, file_path: str, content: str, language: str = "java") -> "SourceFile":
        """Create source file from content string (tests, stdin)."""
        return cls(file_path=file_path, content=content, language=language)

    @property
    def source_bytes(self) -> bytes:
        return self.content.encode(self.encoding)


def relative_path(file_path: Path, source_root: Path) -> str:
    """
    Report path of a file: relative to the root when possible, else the file name.

    Always "/" separated.
    """
    try:
        return file_path.relative_to(source_root).as_posix()
    except ValueError:
        return file_path.name
