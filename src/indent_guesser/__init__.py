"""Guess tabs-vs-spaces and tab size from a document's leading whitespace."""

from .config import GuessDefaults, IndentConfigError, load_defaults
from .core import GuessReport, IndentationGuesser, IndentGuess, guess_indentation, spaces_diff
from .files import FileGuess, analyze_file, analyze_paths
from .sources import FileLineSource, LineSource, StringLineSource

__all__ = [
    "FileGuess",
    "FileLineSource",
    "GuessDefaults",
    "GuessReport",
    "IndentConfigError",
    "IndentGuess",
    "IndentationGuesser",
    "LineSource",
    "StringLineSource",
    "analyze_file",
    "analyze_paths",
    "guess_indentation",
    "load_defaults",
    "spaces_diff",
]
