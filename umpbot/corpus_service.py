import logging
import re
from pathlib import Path

from .constants import (
    ALL_LEAGUE_RULES_MARKER,
    ALWAYS_INCLUDED_DOCUMENTS,
    KNOWLEDGE_EXTENSION,
    PDF_EXTENSION,
)
from .models import CorpusEntry

logger = logging.getLogger(__name__)

_ALL_LEAGUE_RULES_RE = re.compile(re.escape(ALL_LEAGUE_RULES_MARKER), re.IGNORECASE)
_TEEBALL_RE = re.compile(r"Tee-?Ball", re.IGNORECASE)


def relative_posix(path, root):
    """Returns ``path`` relative to ``root`` using forward slashes."""
    return Path(path).relative_to(root).as_posix()


def _walk_pdfs(directory, root):
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        if child.is_dir():
            yield from _walk_pdfs(child, root)
        elif child.is_file() and child.suffix.lower() == PDF_EXTENSION:
            yield CorpusEntry(path=child, relative=relative_posix(child, root))


def list_corpus(root):
    """Lists every PDF under the document root, depth first.

    Args:
        root (str | Path): The document root directory.

    Returns:
        list[CorpusEntry]: Entries in a stable, name-sorted walk order.
    """
    root = Path(root)
    return list(_walk_pdfs(root, root))


def list_knowledge_files(root):
    """Lists the plain-text knowledge files that sit directly in the root."""
    root = Path(root)
    return [
        child
        for child in sorted(root.iterdir(), key=lambda p: p.name)
        if child.is_file() and child.suffix.lower() == KNOWLEDGE_EXTENSION
    ]


def is_all_league_rules(value):
    """Checks whether a path or file name carries the all-league-rules marker.

    Such documents apply to every age group, so the age filter never drops them.
    """
    return bool(_ALL_LEAGUE_RULES_RE.search(value))


def _dedupe(entries):
    unique = {}
    for entry in entries:
        unique.setdefault(entry.path, entry)
    return list(unique.values())


def select_documents(context, corpus, root):
    """Selects the PDFs relevant to a context.

    Root-level documents are always taken. A season narrows the rest of the
    corpus to that season's directory (and its sport subdirectory); without a
    season the whole corpus is taken. Age range and tee-ball level then filter
    the selection, and the forced root documents plus the season's
    all-league-rules documents are added back at the end.

    Args:
        context (Context): The normalized request context.
        corpus (list[CorpusEntry]): Output of ``list_corpus(root)``.
        root (str | Path): The document root the corpus was listed from.

    Returns:
        list[CorpusEntry]: Deduplicated selection, in first-seen order.
    """
    root = Path(root)
    season = context.season
    sport = context.sport

    selected = [entry for entry in corpus if entry.is_root_level]

    if season:
        season_prefix = f"{season}/"
        selected.extend(e for e in corpus if e.relative.startswith(season_prefix))
        if sport:
            sport_prefix = f"{season}/{sport}/"
            selected.extend(e for e in corpus if e.relative.startswith(sport_prefix))
    else:
        selected.extend(corpus)

    results = _dedupe(selected)

    if context.age_range:
        age_re = re.compile(re.escape(context.age_range), re.IGNORECASE)
        results = [
            entry for entry in results
            if age_re.search(entry.relative) or is_all_league_rules(entry.relative)
        ]

    if sport == "Teeball" and context.teeball_level:
        level_re = re.compile(
            rf"Tee-?Ball-?{re.escape(context.teeball_level)}", re.IGNORECASE)
        results = [
            entry for entry in results
            if level_re.search(entry.relative) or not _TEEBALL_RE.search(entry.relative)
        ]

    for name in ALWAYS_INCLUDED_DOCUMENTS:
        forced = root / name
        if forced.is_file():
            results.append(CorpusEntry(path=forced, relative=name))

    if season:
        season_prefix = f"{season}/"
        results.extend(
            entry for entry in corpus
            if entry.relative.startswith(season_prefix) and is_all_league_rules(entry.name)
        )

    results = _dedupe(results)
    logger.info("Selected %d of %d documents for season=%s sport=%s",
                len(results), len(corpus), season, sport)
    return results
