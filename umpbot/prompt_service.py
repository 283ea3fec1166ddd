import logging

from .corpus_service import list_knowledge_files

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
Use the following data only. Use no external knowledge, even things that may sound common or assumed.

{knowledge_base}
{document_text}

Only respond in regards to the 'task' statement. No others.
{task}
Organize your response in the format of "The provided statement is true or false because of 'reason' . Always include and attribute to the referenced rule."
"""


def read_knowledge_base(root):
    """Reads and concatenates the plain-text knowledge files in the root.

    These files are small and authoritative, so they are read on every
    request rather than cached.
    """
    files = list_knowledge_files(root)
    logger.debug("Loading %d knowledge files", len(files))
    return "".join(
        path.read_text(encoding="utf-8", errors="replace") for path in files)


def build_prompt(task, knowledge_base, document_text):
    """Builds the instruction block sent to the completion service.

    Args:
        task (str): The original task string.
        knowledge_base (str): Concatenated plain-text knowledge files.
        document_text (str): Concatenated text of the selected PDFs.

    Returns:
        str: The assembled prompt.
    """
    return PROMPT_TEMPLATE.format(
        knowledge_base=knowledge_base,
        document_text=document_text,
        task=task,
    )
