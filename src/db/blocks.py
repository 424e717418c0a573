"""
Access to the text of a declarative block inside its host document.

Only two operations are needed: read the block body, and replace it. Both raise HostUnavailableError
when the document cannot be reached (closed, not the active view, block removed, ...).
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.core.exceptions import HostUnavailableError

FENCE = "```"
BLOCK_LANGUAGE = "chesser"


class BlockSource(Protocol):
    def read_text(self) -> str: ...

    def replace_text(self, text: str) -> None: ...


class TextBlock:
    """A block that is just a string in memory."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.writes = 0

    def read_text(self) -> str:
        return self.text

    def replace_text(self, text: str) -> None:
        self.text = text
        self.writes += 1


@dataclass
class MarkdownDocument:
    text: str


class MarkdownSection:
    """
    Body of a fenced code block in a markdown document.
    ----
    The block is located by the line of its opening fence. The body is everything between that line and the
    closing fence (both fences excluded).
    """

    def __init__(
        self,
        active_document: Callable[[], Optional[MarkdownDocument]],
        fence_line: int,
    ) -> None:
        self._active_document = active_document
        self.fence_line = fence_line

    def read_text(self) -> str:
        lines, start, end = self._section()
        return "".join(lines[start:end])

    def replace_text(self, text: str) -> None:
        document = self._document()
        lines, start, end = self._section()
        if text and not text.endswith("\n"):
            text += "\n"
        document.text = "".join(lines[:start]) + text + "".join(lines[end:])

    # -- PRIVATE HELPERS ---
    def _document(self) -> MarkdownDocument:
        document = self._active_document()
        if document is None:
            raise HostUnavailableError("Failed to retrieve view")
        return document

    def _section(self) -> tuple[list[str], int, int]:
        """Lines of the document + [start, end) range of the block body."""
        lines = self._document().text.splitlines(keepends=True)
        if self.fence_line >= len(lines) or not lines[self.fence_line].lstrip().startswith(FENCE):
            raise HostUnavailableError(f"No code block starts at line {self.fence_line}.")

        for index in range(self.fence_line + 1, len(lines)):
            if lines[index].strip() == FENCE:
                return lines, self.fence_line + 1, index
        raise HostUnavailableError(f"Code block at line {self.fence_line} is not closed.")


def find_blocks(text: str, language: str = BLOCK_LANGUAGE) -> list[int]:
    """Lines of the opening fences of all blocks in 'text' written in 'language'."""
    fence_lines = []
    inside = False
    for number, line in enumerate(text.splitlines()):
        stripped = line.strip()
        if not stripped.startswith(FENCE):
            continue
        if not inside and stripped[len(FENCE) :].strip() == language:
            fence_lines.append(number)
        inside = not inside
    return fence_lines
