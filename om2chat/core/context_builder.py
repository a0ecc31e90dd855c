"""
Context assembly for the completion prompt.

Pure and deterministic: joins retrieved chunk contents in retrieval order
with a fixed separator, bounded by a character budget.

Dependencies: None
System role: Prompt context construction
"""

from collections.abc import Iterable

DEFAULT_SEPARATOR = "\n---\n"
DEFAULT_MAX_CONTEXT_CHARS = 24000


def assemble_context(
    contents: Iterable[str],
    separator: str = DEFAULT_SEPARATOR,
    max_chars: int | None = DEFAULT_MAX_CONTEXT_CHARS,
) -> str:
    """
    Join chunk contents into one bounded context string.

    Whole chunks are kept while they fit in max_chars (separators count).
    The first chunk that would overflow, and every chunk after it, is
    dropped. A first chunk that alone exceeds the budget is cut to it.

    Args:
        contents: Chunk texts, nearest first
        separator: Text placed between chunks
        max_chars: Character budget (None disables the cap)

    Returns:
        str: Assembled context ("" for no chunks)
    """
    parts: list[str] = []
    used = 0
    for content in contents:
        extra = len(content) + (len(separator) if parts else 0)
        if max_chars is not None and used + extra > max_chars:
            if not parts:
                parts.append(content[:max_chars])
            break
        parts.append(content)
        used += extra
    return separator.join(parts)
