"""Language table: file extensions and the command that runs a source file.

Adding a language is a table edit. Toolchains that compile do so inside the
single invocation, so compile time counts against the evaluation timeout.
"""

from __future__ import annotations

import sys
from pathlib import Path

from aocgen.errors import UnsupportedLanguageError

EXTENSIONS: dict[str, str] = {
    "go": "go",
    "python": "py",
    "javascript": "js",
    "java": "java",
    "scala": "scala",
    "kotlin": "kt",
    "groovy": "groovy",
    "clojure": "clj",
    "csharp": "cs",
    "fsharp": "fs",
    "swift": "swift",
    "objectivec": "m",
    "r": "r",
    "haskell": "hs",
    "ocaml": "ml",
    "racket": "rkt",
    "scheme": "scm",
    "ruby": "rb",
    "erlang": "erl",
    "elixir": "ex",
    "rust": "rs",
    "c": "c",
    "cpp": "cpp",
    "zig": "zig",
    "fortran90": "f90",
    "perl": "pl",
    "pascal": "pas",
    "crystal": "cr",
    "julia": "jl",
    "lua": "lua",
    "php": "php",
    "dart": "dart",
    "bash": "sh",
    "awk": "awk",
    "nim": "nim",
    "d": "d",
    "v": "v",
    "prolog": "pl",
    "tcl": "tcl",
    "coffeescript": "coffee",
    "typescript": "ts",
}

# "{path}" is replaced by the source file path.
INVOCATIONS: dict[str, tuple[str, ...]] = {
    "python": (sys.executable or "python3", "{path}"),
    "javascript": ("node", "{path}"),
    "ruby": ("ruby", "{path}"),
    "go": ("go", "run", "{path}"),
    "java": ("java", "{path}"),
    "elixir": ("elixir", "{path}"),
    "bash": ("bash", "{path}"),
    "perl": ("perl", "{path}"),
    "php": ("php", "{path}"),
    "lua": ("lua", "{path}"),
    "r": ("Rscript", "{path}"),
    "julia": ("julia", "{path}"),
    "swift": ("swift", "{path}"),
    "dart": ("dart", "run", "{path}"),
    "crystal": ("crystal", "run", "{path}"),
    "awk": ("awk", "-f", "{path}"),
    "tcl": ("tclsh", "{path}"),
    "groovy": ("groovy", "{path}"),
}


def extension_for(language: str) -> str:
    try:
        return EXTENSIONS[language]
    except KeyError:
        raise UnsupportedLanguageError(language) from None


def invocation_for(language: str, source_path: str | Path) -> list[str]:
    """Return the argv that runs *source_path* as a *language* program."""
    try:
        template = INVOCATIONS[language]
    except KeyError:
        raise UnsupportedLanguageError(language) from None
    return [str(source_path) if part == "{path}" else part for part in template]


def supported_languages() -> list[str]:
    """Languages that have a run recipe, sorted."""
    return sorted(INVOCATIONS)


def solution_filename(challenge_name: str, language: str) -> str:
    return f"{challenge_name}.{extension_for(language)}"
