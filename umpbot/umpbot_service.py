import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from flask import current_app

from .cache_utils import DocumentTextCache, get_text_store
from .completion_client import CompletionClient
from .constants import WORKER_FETCH_CAP
from .context_parser import build_task, context_from_payload
from .corpus_service import list_corpus, select_documents
from .errors import DocumentRootNotFoundError, MissingTaskError
from .prompt_service import build_prompt, read_knowledge_base
from .utils.pdf_utils import extract_pdf_text

logger = logging.getLogger(__name__)


def _get_max_concurrent_fetches():
    """Returns the number of worker threads used to resolve PDF text.

    ``UMPBOT_FETCH_MAX_WORKERS`` wins when it is a positive integer; otherwise
    the default is five workers per CPU, capped at ``WORKER_FETCH_CAP``.
    """
    default = min((os.cpu_count() or 1) * 5, WORKER_FETCH_CAP)
    configured = os.environ.get("UMPBOT_FETCH_MAX_WORKERS")
    if configured is None:
        return default
    try:
        value = int(configured)
    except ValueError:
        logger.warning("Invalid UMPBOT_FETCH_MAX_WORKERS=%r, using %d", configured, default)
        return default
    if value < 1:
        logger.warning("Non-positive UMPBOT_FETCH_MAX_WORKERS=%r, using %d", configured, default)
        return default
    return value


def resolve_document_texts(entries, text_cache, max_workers=None):
    """Resolves the text of each entry in parallel.

    Args:
        entries (list[CorpusEntry]): The selected documents.
        text_cache (DocumentTextCache): Resolver used for each document.
        max_workers (int, optional): Thread count override.

    Returns:
        list[str]: Texts in the same order as ``entries``.
    """
    if not entries:
        return []
    workers = min(max_workers or _get_max_concurrent_fetches(), len(entries))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(text_cache.resolve_text, entries))


def run_pipeline(task, context, root, text_cache, completion_client):
    """Selects documents for a context, builds the prompt and asks the model.

    Returns:
        str: The completion text.
    """
    corpus = list_corpus(root)
    selection = select_documents(context, corpus, root)
    knowledge_base = read_knowledge_base(root)
    document_text = "".join(resolve_document_texts(selection, text_cache))
    prompt = build_prompt(task, knowledge_base, document_text)
    logger.info("Built prompt of %d characters from %d documents",
                len(prompt), len(selection))
    return completion_client.generate(prompt)


def answer_payload(payload):
    """Answers a rules question for a request payload.

    Must run inside an application context; configuration is read from
    ``current_app.config``.

    Args:
        payload (dict): The parsed request body.

    Returns:
        str: The completion text.

    Raises:
        MissingTaskError: If the payload yields no task.
        DocumentRootNotFoundError: If the document root does not exist.
    """
    task = build_task(payload)
    if not task:
        raise MissingTaskError()

    root = Path(current_app.config["UMPBOT_PDF_ROOT"])
    if not root.exists():
        raise DocumentRootNotFoundError(root)

    store = get_text_store()
    context = context_from_payload(payload, task)
    text_cache = DocumentTextCache(root, store=store, extract=extract_pdf_text)
    completion_client = CompletionClient.from_config(current_app.config)
    return run_pipeline(task, context, root, text_cache, completion_client)
