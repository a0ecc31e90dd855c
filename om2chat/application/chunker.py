"""
Sentence-packing text chunker.

Splits extracted document text at sentence ends (``.``, ``!`` or ``?``
followed by whitespace) and packs whole sentences into chunks of bounded
size with RecursiveCharacterTextSplitter. Terminators stay with their
sentence, so figures such as "3.5%" or "$1,250.00" are stored intact.

Dependencies: langchain_text_splitters
System role: Chunking step of document ingestion
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

SENTENCE_END = r"(?<=[.!?])\s+"


class SentenceChunker:
    """Packs sentences into chunks of at most max_chunk_size characters."""

    def __init__(self, max_chunk_size: int = 1000) -> None:
        self.max_chunk_size = max_chunk_size
        # No finer separator: a sentence longer than the cap is kept whole.
        self._splitter = RecursiveCharacterTextSplitter(
            separators=[SENTENCE_END],
            is_separator_regex=True,
            keep_separator="end",
            chunk_size=max_chunk_size,
            chunk_overlap=0,
            length_function=len,
        )

    def chunk_text(self, text: str) -> list[str]:
        """
        Chunk document text.

        Whitespace runs (line breaks from PDF extraction included) collapse
        to single spaces before splitting. Fragments with no letters or
        digits are dropped.

        Args:
            text: Document text

        Returns:
            list[str]: Non-empty chunks in document order
        """
        normalized = " ".join(text.split())
        if not normalized:
            return []

        chunks = (chunk.strip() for chunk in self._splitter.split_text(normalized))
        return [chunk for chunk in chunks if any(ch.isalnum() for ch in chunk)]
