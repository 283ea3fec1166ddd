import logging

from flask import current_app
from redis.exceptions import RedisError

from .constants import CACHE_PROBE_KEY, PDF_CACHE_NAMESPACE
from .corpus_service import relative_posix
from .extensions import cache
from .utils.pdf_utils import extract_pdf_text

logger = logging.getLogger(__name__)


def make_pdf_cache_key(relative_path, mtime):
    """Creates the cache key for a PDF's extracted text.

    The key embeds the modification time in whole seconds, so editing the file
    moves it to a new key instead of requiring an eviction.

    Args:
        relative_path (str): Forward-slash path below the document root.
        mtime (float): The file's modification time in seconds.

    Returns:
        str: The generated cache key.
    """
    return f"{PDF_CACHE_NAMESPACE}:{relative_path}:{int(mtime)}"


def get_text_store():
    """Returns the cache backend for extracted text, or None to run uncached.

    The backend is probed once; if it cannot be reached the failure is logged
    and the request continues without caching.
    """
    if not current_app.config.get("UMPBOT_TEXT_CACHE_ENABLED"):
        return None
    store = cache.cache
    try:
        store.get(CACHE_PROBE_KEY)
    except (RedisError, OSError) as e:
        logger.error("Cache init failed, continuing without cache: %s", e)
        return None
    return store


class DocumentTextCache:
    """Resolves the text of corpus PDFs through an optional key-value store.

    ``store`` only needs ``get(key)`` and ``set(key, value)``; any cachelib
    backend qualifies. ``extract`` turns raw PDF bytes into text.
    """

    def __init__(self, root, store=None, extract=extract_pdf_text):
        self.root = root
        self.store = store
        self.extract = extract

    def cache_key(self, path):
        """Returns the cache key for a file from its relative path and current mtime."""
        return make_pdf_cache_key(relative_posix(path, self.root), path.stat().st_mtime)

    def resolve_text(self, entry):
        """Returns the text of a corpus entry, extracting it on a cache miss.

        Args:
            entry (CorpusEntry): The document to resolve.

        Returns:
            str: The extracted text.
        """
        key = self.cache_key(entry.path)

        if self.store is not None:
            cached = self.store.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s", key)
                return cached

        logger.debug("Cache miss for %s, extracting", key)
        text = self.extract(entry.path.read_bytes()) or ""

        if self.store is not None:
            self.store.set(key, text)
        return text
