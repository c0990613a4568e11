"""
Test suite for the document chunker.

Covers HTML stripping, document text assembly, and sentence-preserving
bounded chunking.

System role: Verification of text preparation for the embedding index
"""

import pytest

from knowledge_base.core.text.chunker import build_document_text, chunk_text, strip_html


class TestStripHtml:
    """Test suite for strip_html()."""

    def test_strip_html_should_replace_tags_and_collapse_whitespace(self) -> None:
        # Arrange
        html = "<p>Hello <b>world</b></p>\n<br/>  Bye"

        # Act
        result = strip_html(html)

        # Assert
        assert result == "Hello world Bye"

    def test_strip_html_should_return_empty_for_none(self) -> None:
        assert strip_html(None) == ""

    def test_strip_html_should_keep_plain_text(self) -> None:
        assert strip_html("  plain   text  ") == "plain text"


class TestBuildDocumentText:
    """Test suite for build_document_text()."""

    def test_build_document_text_should_join_title_summary_and_body(self) -> None:
        result = build_document_text("Leave Policy", "How to book leave", "<p>Ask your manager.</p>")

        assert result == "Leave Policy\n\nHow to book leave\n\nAsk your manager."

    def test_build_document_text_should_leave_blank_summary_slot(self) -> None:
        result = build_document_text("Title", None, "<p>Body</p>")

        assert result == "Title\n\n\n\nBody"


class TestChunkText:
    """Test suite for chunk_text()."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_chunk_text_should_return_empty_list_for_blank_input(self, text: str) -> None:
        assert chunk_text(text, 100) == []

    def test_chunk_text_should_keep_short_text_in_one_chunk(self) -> None:
        # Act
        chunks = chunk_text("One. Two! Three?", 1000)

        # Assert
        assert chunks == ["One. Two! Three?"]

    def test_chunk_text_should_flush_when_next_sentence_exceeds_limit(self) -> None:
        # Arrange
        text = "Aaaa bbbb. Cccc dddd. Eeee ffff. Gggg hhhh."

        # Act
        chunks = chunk_text(text, 25)

        # Assert
        assert chunks == ["Aaaa bbbb. Cccc dddd.", "Eeee ffff. Gggg hhhh."]
        assert all(len(chunk) <= 25 for chunk in chunks)

    def test_chunk_text_should_keep_oversized_sentence_unmodified(self) -> None:
        # Arrange
        long_sentence = "x" * 50 + "."
        text = f"Short. {long_sentence} End."

        # Act
        chunks = chunk_text(text, 20)

        # Assert
        assert chunks == ["Short.", long_sentence, "End."]

    def test_chunk_text_should_only_exceed_limit_for_single_sentences(self) -> None:
        # Arrange
        text = " ".join(f"Sentence number {i} has some words in it." for i in range(40))

        # Act
        chunks = chunk_text(text, 120)

        # Assert
        for chunk in chunks:
            assert len(chunk) <= 120

    def test_chunk_text_should_lose_no_content(self) -> None:
        # Arrange
        text = "First sentence here.  Second one!\nThird?   And a tail without punctuation"

        # Act
        chunks = chunk_text(text, 30)

        # Assert
        assert " ".join(chunks) == (
            "First sentence here. Second one! Third? And a tail without punctuation"
        )

    def test_chunk_text_should_not_split_on_punctuation_without_whitespace(self) -> None:
        chunks = chunk_text("Version 1.2.3 is out.Next line", 10)

        assert chunks == ["Version 1.2.3 is out.Next line"]
