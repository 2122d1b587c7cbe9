"""Language profiles keyed by file extension."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional


@dataclass(frozen=True, slots=True)
class HighlightingOptions:
    """Which highlight categories are enabled, plus keyword and delimiter tables."""

    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    multiline_comments: bool = False
    primary_keywords: tuple[str, ...] = ()
    secondary_keywords: tuple[str, ...] = ()
    comment_start: str = "//"
    multiline_comment_start: str = "/*"
    multiline_comment_end: str = "*/"

    def __post_init__(self) -> None:
        # keywords arrive as lists from host configuration more often than not
        object.__setattr__(self, "primary_keywords", tuple(self.primary_keywords))
        object.__setattr__(self, "secondary_keywords", tuple(self.secondary_keywords))
        if self.comments and not self.comment_start:
            raise ValueError("comment_start cannot be empty when comments are enabled")
        if self.multiline_comments and not (
            self.multiline_comment_start and self.multiline_comment_end
        ):
            raise ValueError("multiline comment delimiters cannot be empty")


@dataclass(frozen=True, slots=True)
class FileType:
    name: str
    hl_opts: HighlightingOptions = field(default_factory=HighlightingOptions)

    @classmethod
    def default(cls) -> "FileType":
        return cls(name="No filetype")

    @classmethod
    def from_path(cls, path: Optional[str | os.PathLike[str]]) -> "FileType":
        if path is None:
            return cls.default()
        _, extension = os.path.splitext(os.fspath(path))
        return _REGISTRY.get(extension.lower(), cls.default())

    def highlighting_options(self) -> HighlightingOptions:
        return self.hl_opts


RUST = FileType(
    name="Rust",
    hl_opts=HighlightingOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        multiline_comments=True,
        primary_keywords=(
            "as", "break", "const", "continue", "crate", "else", "enum",
            "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop",
            "match", "mod", "move", "mut", "pub", "ref", "return", "self",
            "Self", "static", "struct", "super", "trait", "true", "type",
            "unsafe", "use", "where", "while", "dyn", "abstract", "become",
            "box", "do", "final", "macro", "override", "priv", "typeof",
            "unsized", "virtual", "yield", "async", "await", "try",
        ),
        secondary_keywords=(
            "bool", "char", "i8", "i16", "i32", "i64", "isize", "u8", "u16",
            "u32", "u64", "usize", "f32", "f64",
        ),
    ),
)

C = FileType(
    name="C",
    hl_opts=HighlightingOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        multiline_comments=True,
        primary_keywords=(
            "auto", "break", "case", "const", "continue", "default", "do",
            "else", "enum", "extern", "for", "goto", "if", "inline",
            "register", "restrict", "return", "sizeof", "static", "struct",
            "switch", "typedef", "union", "volatile", "while",
        ),
        secondary_keywords=(
            "char", "double", "float", "int", "long", "short", "signed",
            "unsigned", "void", "size_t",
        ),
    ),
)

PYTHON = FileType(
    name="Python",
    hl_opts=HighlightingOptions(
        numbers=True,
        strings=True,
        comments=True,
        comment_start="#",
        primary_keywords=(
            "False", "None", "True", "and", "as", "assert", "async", "await",
            "break", "class", "continue", "def", "del", "elif", "else",
            "except", "finally", "for", "from", "global", "if", "import",
            "in", "is", "lambda", "nonlocal", "not", "or", "pass", "raise",
            "return", "try", "while", "with", "yield",
        ),
        secondary_keywords=(
            "bool", "bytes", "dict", "float", "int", "list", "object", "self",
            "set", "str", "tuple",
        ),
    ),
)

_REGISTRY: Dict[str, FileType] = {}


def _normalize_extension(extension: str) -> str:
    cleaned = extension.strip().lower()
    if not cleaned:
        raise ValueError("extension cannot be empty")
    return cleaned if cleaned.startswith(".") else f".{cleaned}"


def register_file_type(
    file_type: FileType, extensions: Iterable[str], *, replace: bool = False
) -> FileType:
    """Associate ``file_type`` with each of ``extensions``.

    An extension that already maps to a different profile raises
    ``ValueError`` unless ``replace`` is set.
    """

    normalized = [_normalize_extension(ext) for ext in extensions]
    if not normalized:
        raise ValueError("at least one extension is required")
    if not replace:
        taken = [ext for ext in normalized if ext in _REGISTRY]
        if taken:
            raise ValueError(f"Extensions already registered: {taken}")
    for ext in normalized:
        _REGISTRY[ext] = file_type
    return file_type


def registered_extensions() -> tuple[str, ...]:
    return tuple(sorted(_REGISTRY))


register_file_type(RUST, (".rs",))
register_file_type(C, (".c", ".h"))
register_file_type(PYTHON, (".py", ".pyi"))

__all__ = [
    "C",
    "FileType",
    "HighlightingOptions",
    "PYTHON",
    "RUST",
    "register_file_type",
    "registered_extensions",
]
