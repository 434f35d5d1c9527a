"""Sentence-aligned chunking with word overlap for oversized documents.

Processing flow:
1. Text that fits in max_chars is returned as the only chunk.
2. Otherwise split into sentences (runs ending in '.', '!' or '?'; a trailing
   run without terminal punctuation is kept as the last sentence).
3. Accumulate sentences until the next one would overflow max_chars.
4. Close the chunk and seed the next with the trailing overlap_chars // 6
   words of the closed one (about six characters per word).

A single sentence longer than max_chars is emitted unsplit as its own chunk.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_CHARS_PER_WORD = 6


class ChunkSequence:
    """Lazy, restartable view over the chunks of one text."""

    def __init__(self, chunker: TextChunker, text: str) -> None:
        self._chunker = chunker
        self._text = text

    def __iter__(self) -> Iterator[str]:
        return self._chunker.iter_chunks(self._text)

    def __len__(self) -> int:
        return sum(1 for _ in self)


class TextChunker:
    """Splits normalized text into overlapping chunks that fit a context window."""

    def __init__(self, max_chars: int, overlap_chars: int = 0) -> None:
        if max_chars <= 0:
            raise ValueError(f"max_chars must be positive, got {max_chars}")
        if overlap_chars < 0:
            raise ValueError(f"overlap_chars must be >= 0, got {overlap_chars}")
        self._max_chars = max_chars
        self._overlap_words = overlap_chars // _CHARS_PER_WORD

    @property
    def max_chars(self) -> int:
        return self._max_chars

    def chunk(self, text: str) -> ChunkSequence:
        return ChunkSequence(self, text)

    def iter_chunks(self, text: str) -> Iterator[str]:
        if len(text) <= self._max_chars:
            yield text
            return

        current = ""
        for sentence in self._sentences(text):
            if not current:
                current = sentence
            elif len(current) + 1 + len(sentence) <= self._max_chars:
                current = f"{current} {sentence}"
            else:
                yield current
                current = self._seed(current, sentence)
        if current:
            yield current

    def _sentences(self, text: str) -> Iterator[str]:
        for match in _SENTENCE_RE.finditer(text):
            sentence = match.group().strip()
            if sentence:
                yield sentence

    def _seed(self, closed: str, sentence: str) -> str:
        """Start a new chunk with the tail of the closed one, if it fits."""
        if self._overlap_words == 0:
            return sentence
        words = closed.split(" ")[-self._overlap_words:]
        budget = self._max_chars - len(sentence) - 1
        while words and len(" ".join(words)) > budget:
            words.pop(0)
        if not words:
            return sentence
        return " ".join([*words, sentence])
