"""
Text normalization and chunking.

Exports:
  - strip_html: Tag removal and whitespace collapse
  - chunk_text: Sentence-preserving bounded chunking
  - build_document_text: Embedding text for a document
"""

from knowledge_base.core.text.chunker import build_document_text, chunk_text, strip_html

__all__ = ["strip_html", "chunk_text", "build_document_text"]
