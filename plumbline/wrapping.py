"""Small word-wrap helpers for terminal output."""

from __future__ import annotations


def wrap(text: str, width: int) -> str:
    """Word-wrap ``text`` to ``width`` columns, keeping existing newlines.

    Words longer than ``width`` are put on a line of their own rather
    than split.
    """
    if width <= 0:
        return text
    return "\n".join(_wrap_line(line, width) for line in text.split("\n"))


def indent(prefix: str, text: str, width: int) -> str:
    """Wrap ``text`` so each line, prefixed with ``prefix``, fits ``width``."""
    body = wrap(text, width - len(prefix))
    return "\n".join(prefix + line for line in body.split("\n"))


def _wrap_line(line: str, width: int) -> str:
    if len(line) <= width:
        return line
    words = line.split()
    if not words:
        return ""
    lines: list[str] = [words[0]]
    for word in words[1:]:
        if len(lines[-1]) + 1 + len(word) > width:
            lines.append(word)
        else:
            lines[-1] += " " + word
    return "\n".join(lines)