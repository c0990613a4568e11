"""
Document chunker.

Splits normalized document text into sentence-aligned chunks bounded by a
maximum size. Sentences are never cut: a single sentence longer than the
bound becomes its own oversized chunk.

Dependencies: re (stdlib)
System role: Text preparation for the embedding index
"""

import re

DEFAULT_MAX_CHUNK_SIZE = 1000

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")
# Split after sentence-terminal punctuation; the punctuation stays with its sentence.
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def strip_html(html: str | None) -> str:
    """
    Remove markup from rich text.

    Every tag is replaced with a space, whitespace runs collapse to one
    space, and the result is trimmed.
    """
    if not html:
        return ""
    text = _TAG_PATTERN.sub(" ", html)
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def build_document_text(title: str, summary: str | None, body_html: str | None) -> str:
    """
    Build the normalized text embedded for a document.

    Args:
        title: Document title (display name for profiles)
        summary: Optional subtitle (job title for profiles)
        body_html: Rich-text body

    Returns:
        "<title>\\n\\n<summary>\\n\\n<plain body>"
    """
    return f"{title}\n\n{summary or ''}\n\n{strip_html(body_html)}"


def chunk_text(full_text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """
    Split text into chunks of whole sentences.

    Fragments are accumulated greedily and joined with a single space. A
    fragment that would push the buffer past max_chunk_size starts a new
    chunk instead.

    Args:
        full_text: Normalized document text
        max_chunk_size: Target upper bound on chunk length

    Returns:
        Trimmed, non-empty chunks in text order; [] for blank input
    """
    if not full_text or not full_text.strip():
        return []

    chunks: list[str] = []
    buffer = ""

    for fragment in _SENTENCE_BOUNDARY.split(full_text):
        fragment = fragment.strip()
        if not fragment:
            continue

        if buffer and len(buffer) + 1 + len(fragment) > max_chunk_size:
            chunks.append(buffer)
            buffer = fragment
        elif buffer:
            buffer = f"{buffer} {fragment}"
        else:
            buffer = fragment

    if buffer:
        chunks.append(buffer)

    return chunks
