from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Context:
    """Normalized scoping information for a single rules question."""
    season: Optional[str] = None
    sport: Optional[str] = None  # Baseball, Softball or Teeball
    age_range: Optional[str] = None  # "U<n>"
    teeball_level: Optional[str] = None  # I or II
    question: Optional[str] = None

    def to_dict(self):
        return {
            "season": self.season,
            "sport": self.sport,
            "age_range": self.age_range,
            "teeball_level": self.teeball_level,
            "question": self.question,
        }


@dataclass(frozen=True)
class CorpusEntry:
    """A PDF under the document root.

    ``relative`` is the path below the root with forward slashes, whatever the
    host separator is, so season and sport prefixes can be matched directly.
    """
    path: Path
    relative: str

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def depth(self) -> int:
        """Number of directories between the root and the file."""
        return self.relative.count("/")

    @property
    def is_root_level(self) -> bool:
        return self.depth == 0
