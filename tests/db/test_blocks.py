"""Unit tests for src/db/blocks.py"""

import pytest

from src.core.exceptions import HostUnavailableError
from src.db.blocks import MarkdownDocument, MarkdownSection, TextBlock, find_blocks

NOTE = """\
# Openings

```chesser
id: first
fen: 8/8/8/8/8/8/8/k6K w - - 0 1
```

Some text.

```python
print("not a board")
```

```chesser
```
"""


def test_text_block() -> None:
    block = TextBlock("id: abc\n")
    assert block.read_text() == "id: abc\n"
    block.replace_text("id: def\n")
    assert block.read_text() == "id: def\n"
    assert block.writes == 1


def test_find_blocks() -> None:
    assert find_blocks(NOTE) == [2, 13]
    assert find_blocks(NOTE, language="python") == [9]
    assert find_blocks("no blocks here") == []


def test_read_section() -> None:
    document = MarkdownDocument(NOTE)
    section = MarkdownSection(lambda: document, 2)
    assert section.read_text() == "id: first\nfen: 8/8/8/8/8/8/8/k6K w - - 0 1\n"

    empty = MarkdownSection(lambda: document, 13)
    assert empty.read_text() == ""


def test_replace_section_keeps_rest_of_document() -> None:
    document = MarkdownDocument(NOTE)
    section = MarkdownSection(lambda: document, 13)
    section.replace_text("id: second")

    assert section.read_text() == "id: second\n"
    assert document.text.startswith("# Openings\n\n```chesser\nid: first\n")
    assert document.text.endswith("```chesser\nid: second\n```\n")
    # the other block did not move
    assert MarkdownSection(lambda: document, 2).read_text().startswith("id: first")


def test_no_active_document() -> None:
    section = MarkdownSection(lambda: None, 2)
    with pytest.raises(HostUnavailableError):
        section.read_text()
    with pytest.raises(HostUnavailableError):
        section.replace_text("id: abc")


@pytest.mark.parametrize(
    "text, fence_line",
    [
        (NOTE, 0),  # not a fence
        (NOTE, 100),  # past the end
        ("```chesser\nid: abc\n", 0),  # never closed
    ],
)
def test_block_cannot_be_located(text: str, fence_line: int) -> None:
    section = MarkdownSection(lambda: MarkdownDocument(text), fence_line)
    with pytest.raises(HostUnavailableError):
        section.read_text()
