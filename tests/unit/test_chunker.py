import pytest

from contract_analyzer.text.chunker import TextChunker


class TestTextChunker:
    def test_short_text_is_single_chunk(self) -> None:
        chunker = TextChunker(max_chars=100)
        assert list(chunker.chunk("Client: Acme.")) == ["Client: Acme."]

    def test_empty_text_is_single_empty_chunk(self) -> None:
        chunker = TextChunker(max_chars=100)
        assert list(chunker.chunk("")) == [""]

    def test_splits_on_sentence_boundaries(self) -> None:
        chunker = TextChunker(max_chars=20)
        chunks = list(chunker.chunk("One two. Three four. Five six."))
        assert chunks == ["One two. Three four.", "Five six."]

    def test_chunks_fit_max_chars(self) -> None:
        chunker = TextChunker(max_chars=40, overlap_chars=12)
        text = " ".join(f"Sentence number {i} is here." for i in range(30))
        chunks = list(chunker.chunk(text))
        assert len(chunks) > 1
        assert all(len(chunk) <= 40 for chunk in chunks)

    def test_seeds_next_chunk_with_overlap_words(self) -> None:
        chunker = TextChunker(max_chars=20, overlap_chars=6)
        chunks = list(chunker.chunk("One two. Three four. Five six."))
        assert chunks == ["One two. Three four.", "four. Five six."]

    def test_overlap_is_trimmed_to_fit(self) -> None:
        chunker = TextChunker(max_chars=20, overlap_chars=30)
        chunks = list(chunker.chunk("a b c d e f g h i. Next one here."))
        assert chunks == ["a b c d e f g h i.", "h i. Next one here."]

    def test_oversized_sentence_is_emitted_unsplit(self) -> None:
        chunker = TextChunker(max_chars=10)
        chunks = list(chunker.chunk("Short. This sentence is far too long."))
        assert chunks == ["Short.", "This sentence is far too long."]

    def test_keeps_trailing_fragment_without_punctuation(self) -> None:
        chunker = TextChunker(max_chars=12)
        chunks = list(chunker.chunk("Alpha beta. Gamma delta"))
        assert chunks == ["Alpha beta.", "Gamma delta"]

    def test_sequence_is_restartable_and_sized(self) -> None:
        chunker = TextChunker(max_chars=20)
        sequence = chunker.chunk("One two. Three four. Five six.")
        assert len(sequence) == 2
        assert list(sequence) == list(sequence)

    def test_rejects_non_positive_max_chars(self) -> None:
        with pytest.raises(ValueError, match="max_chars"):
            TextChunker(max_chars=0)

    def test_rejects_negative_overlap(self) -> None:
        with pytest.raises(ValueError, match="overlap_chars"):
            TextChunker(max_chars=10, overlap_chars=-1)
