"""Glob matching for child enumeration."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from remote_paths._path import BasePath

_WILDCARD = re.compile(r"[*?\[{]")

_ANY_DIRS = r"(?:[^/]*/)*"
_VISIBLE_DIRS = r"(?:(?!\.)[^/]*/)*"
_NO_DOT = r"(?!\.)"


class MatchSpec:
    """Matches candidate path strings against a glob pattern under a base path.

    Leading pattern segments without wildcards are folded into :attr:`path`,
    so ``MatchSpec(p, "a/b/*.csv").path`` is ``p.join("a", "b")`` and the
    remaining pattern is ``*.csv``. A pattern without any wildcard leaves
    :attr:`pattern` as ``None``: the caller should look up :attr:`path`
    directly instead of listing.

    Matching follows file-name globbing with path separators: ``*`` and ``?``
    stay within one segment, ``**/`` spans any number of directories,
    ``[...]`` and ``{a,b}`` are supported. Names starting with ``.`` only
    match when ``hidden`` is set or the pattern spells the dot out.

    :param path: Base path.
    :param pattern: Glob pattern relative to ``path``.
    :param case_sensitive: Match letter case exactly.
    :param hidden: Let wildcards match names starting with ``.``.
    """

    def __init__(self, path: BasePath, pattern: str, *, case_sensitive: bool = False, hidden: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self.hidden = hidden
        elements = pattern.split("/")
        index = next((i for i, element in enumerate(elements) if _WILDCARD.search(element)), None)
        if index is None:
            self.path = path.join(pattern) if pattern else path
            self.pattern: str | None = None
        elif index == 0:
            self.path = path
            self.pattern = pattern
        else:
            self.path = path.join(*elements[:index])
            self.pattern = "/".join(elements[index:])
        self._regex = None
        if self.pattern is not None:
            flags = 0 if case_sensitive else re.IGNORECASE
            self._regex = re.compile(translate(self.pattern, hidden=hidden), flags)

    @property
    def exact(self) -> bool:
        """``True`` when the pattern had no wildcard characters."""
        return self.pattern is None

    def match(self, candidate: str) -> bool:
        """Return whether the fully-qualified ``candidate`` matches."""
        if self._regex is None:
            return candidate == str(self.path)
        base = str(self.path).rstrip("/") + "/"
        if not candidate.startswith(base):
            return False
        return self._regex.fullmatch(candidate[len(base) :]) is not None

    def __repr__(self) -> str:
        return f"MatchSpec(path={str(self.path)!r}, pattern={self.pattern!r})"


def translate(pattern: str, *, hidden: bool = False) -> str:
    """Translate a glob pattern into a regular expression (without anchors)."""
    return _translate(pattern, hidden, segment_start=True)


def _translate(pattern: str, hidden: bool, *, segment_start: bool) -> str:
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        guard = "" if hidden or not segment_start else _NO_DOT
        if c == "*":
            if segment_start and pattern.startswith("**/", i):
                out.append(_ANY_DIRS if hidden else _VISIBLE_DIRS)
                i += 3
                continue
            while i < n and pattern[i] == "*":
                i += 1
            out.append(guard + "[^/]*")
        elif c == "?":
            out.append(guard + "[^/]")
            i += 1
        elif c == "[" and _class_end(pattern, i) > 0:
            end = _class_end(pattern, i)
            out.append(guard + _char_class(pattern[i + 1 : end]))
            i = end + 1
        elif c == "{" and _brace_end(pattern, i) > 0:
            end = _brace_end(pattern, i)
            alternatives = _split_alternatives(pattern[i + 1 : end])
            out.append(
                "(?:" + "|".join(_translate(a, hidden, segment_start=segment_start) for a in alternatives) + ")"
            )
            i = end + 1
        elif c == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(c))
            i += 1
        segment_start = c == "/"
    return "".join(out)


def _class_end(pattern: str, start: int) -> int:
    j = start + 1
    if j < len(pattern) and pattern[j] in "!^":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1
    return pattern.find("]", j)


def _char_class(body: str) -> str:
    negate = body[:1] in ("!", "^")
    if negate:
        body = body[1:]
    body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    if body.startswith("^"):
        body = "\\" + body
    if negate:
        return f"[^/{body}]"
    return f"[{body}]"


def _brace_end(pattern: str, start: int) -> int:
    depth = 0
    i = start
    while i < len(pattern):
        c = pattern[i]
        if c == "\\":
            i += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _split_alternatives(body: str) -> list[str]:
    alternatives: list[str] = []
    depth = 0
    current: list[str] = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\" and i + 1 < len(body):
            current.append(body[i : i + 2])
            i += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == "," and depth == 0:
            alternatives.append("".join(current))
            current = []
            i += 1
            continue
        current.append(c)
        i += 1
    alternatives.append("".join(current))
    return alternatives
