"""Text block formatting for generated code."""

import re
import string
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

_CONTINUATION = re.compile(r"\\\n[ \t]*")

_formatter = string.Formatter()


def _clean_literal(text: str) -> str:
    """Drop backslash line continuations and unescape backticks."""
    return _CONTINUATION.sub("", text).replace("\\`", "`")


def _from_fragments(
    fragments: Sequence[str], values: Sequence[Any]
) -> Iterator[Tuple[str, bool]]:
    for i, fragment in enumerate(fragments):
        yield fragment, True
        if i < len(values):
            yield str(values[i]), False


def _from_template(
    template: str, values: Sequence[Any], fields: Any
) -> Iterator[Tuple[str, bool]]:
    auto_index = 0
    for literal, field_name, format_spec, conversion in _formatter.parse(template):
        yield literal, True
        if field_name is None:
            continue
        if field_name == "":
            field_name = str(auto_index)
            auto_index += 1
        value, _ = _formatter.get_field(field_name, values, fields)
        value = _formatter.convert_field(value, conversion)
        yield _formatter.format_field(value, format_spec or ""), False


def _split_lines(pieces: Iterable[Tuple[str, bool]]) -> Tuple[List[str], List[bool]]:
    """Split joined pieces into lines, noting which lines start in literal text."""
    lines = [""]
    starts: List[Optional[bool]] = [None]
    for text, is_literal in pieces:
        for i, part in enumerate(text.split("\n")):
            if i:
                lines.append("")
                starts.append(None)
            if part and starts[-1] is None:
                starts[-1] = is_literal
            lines[-1] += part
    return lines, [bool(start) for start in starts]


def _leading_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def unpad(template: Union[str, Sequence[str]], *values: Any, **fields: Any) -> str:
    """
    Build a block of text and strip its common indentation.

    ``template`` is either a ``str.format`` style string (placeholders are
    filled from ``values`` and ``fields``) or a sequence of literal fragments
    with one value between each pair. Substituted values are inserted as-is;
    only the literal text has its ``\\<newline>`` continuations removed.

    The smallest indentation among lines that start in literal text and have
    content is removed from every line starting with a space, so a literal
    line without indentation leaves the text as it is. Lines continuing a
    multi-line value and blank lines never count. The result is trimmed and
    a literal ``\\n`` becomes a newline.

    Example:
        unpad('''
            <ul>
              <li>{}</li>
            </ul>
        ''', "item")  ->  '<ul>\\n  <li>item</li>\\n</ul>'
    """
    if isinstance(template, str):
        pieces = _from_template(template, values, fields)
    else:
        pieces = _from_fragments(template, values)

    lines, literal_starts = _split_lines(
        (_clean_literal(text) if is_literal else text, is_literal)
        for text, is_literal in pieces
    )
    widths = [
        _leading_width(line)
        for line, is_literal in zip(lines, literal_starts)
        if is_literal and line.strip()
    ]
    indent = min(widths) if widths else 0

    if indent:
        lines = [
            line[min(indent, _leading_width(line)):] if line.startswith(" ") else line
            for line in lines
        ]

    return "\n".join(lines).strip().replace("\\n", "\n")
