"""Walk document markup as a flat list of styled blocks for the exporters."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
_BLOCK_TAGS = frozenset({"p", "div", "li", "blockquote", "pre", *HEADING_TAGS})
_LIST_TAGS = frozenset({"ul", "ol"})
_VOID_TAGS = frozenset({"br", "img", "hr", "input", "meta", "link", "wbr"})
_WS_RE = re.compile(r"[ \t\r\n\f]+")


@dataclass
class Run:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass
class Block:
    """One paragraph-level element: a paragraph, heading, list item or quote."""

    kind: str = "p"
    runs: list[Run] = field(default_factory=list)
    alignment: str | None = None  # "left" | "center" | "right" | "justify"
    list_type: str | None = None  # "ul" | "ol" for list items
    index: int = 0  # 1-based position within an ordered list

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)

    @property
    def heading_level(self) -> int | None:
        return int(self.kind[1]) if self.kind in HEADING_TAGS else None


@dataclass
class _Element:
    tag: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    alignment: str | None = None


def _parse_style(style: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for decl in style.split(";"):
        if ":" in decl:
            key, value = decl.split(":", 1)
            out[key.strip().lower()] = value.strip().lower()
    return out


def _element_for(tag: str, attrs: dict[str, str]) -> _Element:
    style = _parse_style(attrs.get("style", ""))
    weight = style.get("font-weight", "")
    alignment = style.get("text-align") or attrs.get("align", "").lower() or None
    if alignment not in (None, "left", "center", "right", "justify"):
        alignment = None
    return _Element(
        tag=tag,
        bold=tag in ("b", "strong") or weight == "bold" or (weight.isdigit() and int(weight) >= 600),
        italic=tag in ("i", "em") or style.get("font-style") == "italic",
        underline=tag == "u" or "underline" in style.get("text-decoration", ""),
        alignment=alignment,
    )


class _BlockParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: list[Block] = []
        self._stack: list[_Element] = []
        self._lists: list[list] = []  # [tag, item_counter]
        self._current: Block | None = None

    # -- helpers -----------------------------------------------------------

    def _in_block(self) -> bool:
        return any(el.tag in _BLOCK_TAGS for el in self._stack)

    def _flush(self) -> None:
        block = self._current
        self._current = None
        if block is None:
            return
        runs = [r for r in block.runs if r.text]
        if runs:
            runs[0].text = runs[0].text.lstrip(" ")
            runs[-1].text = runs[-1].text.rstrip(" \n")
        block.runs = [r for r in runs if r.text]
        if block.text.strip():
            self.blocks.append(block)

    def _open_block(self) -> Block:
        if self._current is None:
            kind = "p"
            for el in reversed(self._stack):
                if el.tag in _BLOCK_TAGS:
                    kind = el.tag
                    break
            alignment = next((el.alignment for el in reversed(self._stack) if el.alignment), None)
            block = Block(kind=kind, alignment=alignment)
            if kind == "li" and self._lists:
                block.list_type = self._lists[-1][0]
                block.index = self._lists[-1][1]
            elif kind == "div":
                block.kind = "p"
            self._current = block
        return self._current

    def _append(self, text: str) -> None:
        block = self._open_block()
        run = Run(
            text,
            bold=any(el.bold for el in self._stack),
            italic=any(el.italic for el in self._stack),
            underline=any(el.underline for el in self._stack),
        )
        last = block.runs[-1] if block.runs else None
        if last and (last.bold, last.italic, last.underline) == (run.bold, run.italic, run.underline):
            last.text += text
        else:
            block.runs.append(run)

    # -- parser callbacks --------------------------------------------------

    def handle_starttag(self, tag: str, attrs) -> None:
        tag = tag.lower()
        attrs_dict = {str(k).lower(): ("" if v is None else str(v)) for k, v in attrs}
        if tag == "br":
            if self._in_block():
                self._append("\n")
            else:
                self._flush()
            return
        if tag in _VOID_TAGS:
            return
        if tag in _LIST_TAGS:
            self._flush()
            self._lists.append([tag, 0])
        elif tag in _BLOCK_TAGS:
            self._flush()
            if tag == "li" and self._lists:
                self._lists[-1][1] += 1
        self._stack.append(_element_for(tag, attrs_dict))

    def handle_startendtag(self, tag: str, attrs) -> None:
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        if tag in _VOID_TAGS:
            return
        if tag in _BLOCK_TAGS or tag in _LIST_TAGS:
            self._flush()
        # Close back to the matching element; tolerate stray end tags.
        for i in range(len(self._stack) - 1, -1, -1):
            if self._stack[i].tag == tag:
                del self._stack[i:]
                break
        if tag in _LIST_TAGS and self._lists:
            self._lists.pop()

    def handle_data(self, data: str) -> None:
        text = _WS_RE.sub(" ", data)
        if not text.strip() and (self._current is None or not self._current.runs):
            return
        self._append(text)

    def close(self) -> None:
        super().close()
        self._flush()


def parse_blocks(markup: str) -> list[Block]:
    """Split markup into paragraph-level blocks with inline run styling.

    Top-level text separated by <br> becomes separate paragraphs; a <br>
    inside a block becomes a line break within that block.
    """
    parser = _BlockParser()
    parser.feed(markup or "")
    parser.close()
    return parser.blocks
