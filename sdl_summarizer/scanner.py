"""Line-oriented scanning primitives shared by the operation and type passes.

Both passes walk the schema one line at a time and share three concerns:

- brace depth tracking for a block that opens on a header line
  (``BlockScanner``),
- accumulation of ``\"\"\"`` / ``#`` description lines that precede a
  declaration (``DescriptionBuffer``),
- anchored pattern matchers for field declarations and definition headers.

Matchers use ASCII ``\\w`` so identifiers follow GraphQL's name rules.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .models import Parameter, TypeKind

TRIPLE_QUOTE = '"""'

# Field declaration:
#   name      identifier at the start of the line
#   args      optional parenthesized argument list, parentheses included
#   returns   return type expression, up to a "{" or end of line
FIELD_RE = re.compile(
    r"^\s*(?P<name>\w+)\s*(?P<args>\([^)]*\))?\s*:\s*(?P<returns>.+?)(?:\s*\{|\s*$)",
    re.ASCII,
)

# One "<name> : <type>" pair inside an argument list; the type runs to the next comma.
PARAM_RE = re.compile(r"(?P<name>\w+)\s*:\s*(?P<type>[^,]+)", re.ASCII)

# Definition header:
#   kind      one of the six SDL definition keywords
#   name      identifier following the keyword
HEADER_RE = re.compile(
    r"^(?P<kind>type|interface|enum|scalar|union|input)\s+(?P<name>\w+)",
    re.ASCII,
)

HEADER_PREFIXES = tuple(f"{kind.value} " for kind in TypeKind)


@dataclass(frozen=True)
class FieldMatch:
    """Captures of a matched field declaration."""

    name: str
    args: Optional[str]
    returns: str


@dataclass(frozen=True)
class HeaderMatch:
    """Captures of a matched definition header."""

    kind: TypeKind
    name: str


def brace_delta(line: str) -> int:
    """Number of "{" minus number of "}" on a line."""
    return line.count("{") - line.count("}")


def is_description_line(trimmed: str) -> bool:
    """Whether a trimmed line starts with a triple quote or a comment marker."""
    return trimmed.startswith(TRIPLE_QUOTE) or trimmed.startswith("#")


def description_text(trimmed: str) -> str:
    """Strip one leading marker and one trailing triple quote."""
    if trimmed.startswith(TRIPLE_QUOTE):
        text = trimmed[len(TRIPLE_QUOTE):]
    elif trimmed.startswith("#"):
        text = trimmed[1:]
    else:
        text = trimmed
    if text.endswith(TRIPLE_QUOTE):
        text = text[: -len(TRIPLE_QUOTE)]
    return text.strip()


def closes_inline_description(trimmed: str) -> bool:
    """True for a description opened and closed on the same line."""
    return (
        trimmed.startswith(TRIPLE_QUOTE)
        and trimmed.endswith(TRIPLE_QUOTE)
        and len(trimmed) > len(TRIPLE_QUOTE)
    )


def match_field(text: str) -> Optional[FieldMatch]:
    """Match a field declaration, or return None for any other line."""
    m = FIELD_RE.match(text)
    if not m:
        return None
    return FieldMatch(name=m.group("name"), args=m.group("args"), returns=m.group("returns"))


def parse_parameters(args: Optional[str]) -> list[Parameter]:
    """
    Parse a parenthesized argument list.

    Args:
        args: Text such as "(id: ID!, first: Int)", or None

    Returns:
        Parameters in declaration order. A parameter is required when its type
        carries a non-null marker; the marker is removed from the stored type.
    """
    if not args:
        return []

    content = args.replace("(", "").replace(")", "")
    params = []
    for m in PARAM_RE.finditer(content):
        raw_type = m.group("type").strip()
        params.append(
            Parameter(
                name=m.group("name"),
                type=raw_type.replace("!", "").strip(),
                required="!" in raw_type,
            )
        )
    return params


def clean_return_type(raw: str) -> str:
    """Drop any trailing selection braces, then non-null markers and commas."""
    text = raw.strip()
    brace = text.find("{")
    if brace != -1:
        text = text[:brace]
    return text.strip().replace("!", "").replace(",", "").strip()


def match_header(trimmed: str) -> Optional[HeaderMatch]:
    """Match a definition header such as "enum Color {", or return None."""
    m = HEADER_RE.match(trimmed)
    if not m:
        return None
    return HeaderMatch(kind=TypeKind(m.group("kind")), name=m.group("name"))


def starts_with_header_keyword(trimmed: str) -> bool:
    """Whether a line begins with one of the six definition keywords and a space."""
    return trimmed.startswith(HEADER_PREFIXES)


def is_root_header(trimmed: str, root_name: str) -> bool:
    """Whether a line opens the root type block named root_name."""
    head = f"type {root_name}"
    return trimmed == head or trimmed.startswith(head + " ") or trimmed.startswith(head + "{")


def toggles_block_string(trimmed: str) -> bool:
    """Whether a line opens or closes a block string (odd number of triple quotes)."""
    return trimmed.count(TRIPLE_QUOTE) % 2 == 1


def inline_body(trimmed: str) -> str:
    """Text following the first "{" of a header line, minus a closing "}"."""
    brace = trimmed.find("{")
    if brace == -1:
        return ""
    body = trimmed[brace + 1:].strip()
    if body.endswith("}"):
        body = body[:-1]
    return body.strip()


class DescriptionBuffer:
    """
    Accumulates description lines until the declaration they describe.

    A description is "active" from its first line until a non-description
    line settles it. Blank lines clear the buffer only while no description
    is active. A triple-quoted opener that does not close on its own line
    starts a block; every line up to the closing quotes is description text.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._pending = ""
        self.active = False
        self.in_block = False

    def accepts(self, trimmed: str) -> bool:
        """Whether the line belongs to a description: a marker line or block-string text."""
        return self.in_block or is_description_line(trimmed)

    def add(self, trimmed: str) -> None:
        """Record one description line, opening or closing a block string as needed."""
        if self.in_block:
            if trimmed.endswith(TRIPLE_QUOTE):
                text = trimmed[: -len(TRIPLE_QUOTE)].strip()
                self.in_block = False
                self._push(text)
                self.settle()
            else:
                self._push(trimmed)
            return

        self.active = True
        self._push(description_text(trimmed))
        if closes_inline_description(trimmed):
            self.settle()
        elif trimmed.startswith(TRIPLE_QUOTE):
            self.in_block = True

    def _push(self, text: str) -> None:
        if text:
            self._lines.append(text)

    def settle(self) -> None:
        """Fold accumulated lines into the pending description."""
        if self._lines:
            joined = " ".join(self._lines).strip()
            self._pending = f"{self._pending} {joined}".strip() if self._pending else joined
            self._lines = []
        self.active = False

    @property
    def pending(self) -> str:
        """Settled description text waiting for a declaration."""
        return self._pending

    def blank(self) -> None:
        """Handle a blank line: drop the description unless one is still active."""
        if not self.active:
            self.clear()

    def take(self) -> Optional[str]:
        """Return the description (None when empty) and reset."""
        self.settle()
        description = self._pending.strip() or None
        self.clear()
        return description

    def clear(self) -> None:
        """Forget all accumulated and pending text."""
        self._lines = []
        self._pending = ""
        self.active = False
        self.in_block = False


class BlockScanner:
    """
    Brace-depth state machine for one block at a time.

    OUTSIDE -> open(header) -> OPEN -> feed(line)... -> closed -> OUTSIDE

    The close condition is a predicate over (line, depth) evaluated after each
    line, the header line included, so a block balanced on its header line
    closes immediately.
    """

    def __init__(self, closes: Callable[[str, int], bool]):
        self._closes = closes
        self.depth = 0
        self.is_open = False

    def open(self, line: str) -> bool:
        """Enter a block at its header line. Returns True if it also closed."""
        self.is_open = True
        self.depth = brace_delta(line)
        return self._check(line)

    def feed(self, line: str) -> bool:
        """Account for a body line. Returns True if the block closed on it."""
        self.depth += brace_delta(line)
        return self._check(line)

    def reset(self) -> None:
        """Return to OUTSIDE without closing a block."""
        self.depth = 0
        self.is_open = False

    def _check(self, line: str) -> bool:
        if self._closes(line, self.depth):
            self.is_open = False
            return True
        return False
