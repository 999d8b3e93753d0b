from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .parser import parse_captures
from .translation import TranslationTable


@dataclass(slots=True)
class LogFile:
    """One discovered file and the ordering data parsed from its path.

    Attributes:
        path: File path as produced by the scan
        raw_parts: Named capture group -> literal matched text
        score_parts: Named capture group -> translated integer score
        parsed: Set once both mappings have been populated
    """

    path: str
    raw_parts: Dict[str, str] = field(default_factory=dict)
    score_parts: Dict[str, int] = field(default_factory=dict)
    parsed: bool = field(default=False, compare=False)

    def populate_match_parts(
        self,
        names: Sequence[str],
        values: Sequence[Optional[str]],
        translation: Optional[TranslationTable] = None,
    ) -> None:
        """Score the captures for this file.

        Both mappings are assigned together, and only when every capture
        resolved; on failure the file keeps no score data.

        Raises:
            FileParseError: if any capture could not be scored
        """
        raw_parts, score_parts = parse_captures(names, values, translation, path=self.path)
        self.raw_parts = raw_parts
        self.score_parts = score_parts
        self.parsed = True


# resolved differentiator name -> files of that logical stream
StreamGroup = Dict[str, List[LogFile]]


def index_of(files: Sequence[LogFile], path: str) -> int:
    """Return the position of ``path`` in ``files``, or -1 if it is absent."""
    for index, logfile in enumerate(files):
        if logfile.path == path:
            return index
    return -1
