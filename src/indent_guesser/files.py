from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .config import GuessDefaults, load_defaults
from .core import GuessReport, IndentationGuesser
from .sources import FileLineSource

logger = logging.getLogger(__name__)


@dataclass
class FileGuess:
    path: Path
    report: GuessReport

    @property
    def insert_spaces(self) -> bool:
        return self.report.guess.insert_spaces

    @property
    def tab_size(self) -> int:
        return self.report.guess.tab_size

    def to_dict(self) -> dict:
        return {"path": str(self.path), **self.report.to_dict()}


def is_probably_text(path: Path, sample_size: int = 2048) -> bool:
    """Heuristic to skip binary files quickly."""
    try:
        with path.open("rb") as handle:
            data = handle.read(sample_size)
    except OSError:
        return False
    return b"\0" not in data


def _walk(directory: Path) -> Iterable[Path]:
    for child in sorted(directory.iterdir()):
        if child.is_dir():
            # Symlinked directories can loop back into the tree.
            if child.name.startswith(".") or child.is_symlink():
                continue
            yield from _walk(child)
        elif child.is_file():
            yield child


def discover_files(paths: Iterable[str | Path]) -> List[Path]:
    """Expand file and directory inputs into a flat list of candidate files."""
    files: List[Path] = []
    for raw in paths:
        path = Path(raw).expanduser()
        if path.is_dir():
            files.extend(_walk(path))
        elif path.is_file():
            files.append(path)
        else:
            logger.debug("skipping missing path %s", path)
    return files


def analyze_file(path: Path, defaults: Optional[GuessDefaults] = None) -> FileGuess | None:
    """Guess the indentation settings of a single file."""
    if not is_probably_text(path):
        logger.debug("skipping binary or unreadable file %s", path)
        return None

    defaults = defaults or load_defaults()
    try:
        source = FileLineSource.open(path)
    except (OSError, UnicodeError) as exc:
        logger.debug("could not read %s: %s", path, exc)
        return None

    report = IndentationGuesser(source, defaults.tab_size, defaults.insert_spaces).report()
    return FileGuess(path=path, report=report)


def analyze_paths(paths: Iterable[str | Path], defaults: Optional[GuessDefaults] = None) -> List[FileGuess]:
    """Analyze many paths and collect results."""
    defaults = defaults or load_defaults()
    results: List[FileGuess] = []
    for file_path in discover_files(paths):
        result = analyze_file(file_path, defaults)
        if result:
            results.append(result)
    return results
