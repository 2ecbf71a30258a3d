from typing import Dict, Iterable, List, Optional, Tuple

from codesize.core.shared_types import display_path

# Values at or above this are divided by the base once more
SCALE_THRESHOLD = 10000
UNIT_SUFFIXES = ("K", "M", "G", "T")

def format_human_readable(value: int, base: Optional[int] = None) -> str:
    """
    Raw integer when `base` is None; otherwise integer-divides by `base`
    while the value is >= 10000, at most up to the T suffix.

    >>> format_human_readable(10_000_000, 1000)
    '10M'
    """
    if base is None:
        return str(value)

    suffix = ""
    for unit in UNIT_SUFFIXES:
        if value < SCALE_THRESHOLD:
            break
        value //= base
        suffix = unit
    return f"{value}{suffix}"

def extension_label(extension: str) -> str:
    return f".{extension}" if extension else ""

def label_width(extensions: Iterable[str]) -> int:
    longest = max((len(ext) for ext in extensions), default=0)
    # +1 for the leading dot
    return longest + 1 if longest > 0 else 0

def render_totals(totals: Dict[str, int], base: Optional[int] = None) -> List[str]:
    """
    One line per extension, largest total first, ties by extension.
    """
    if not totals:
        return []

    rows: List[Tuple[str, int]] = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    width = label_width(totals)
    return [
        f"{extension_label(ext).ljust(width)} {format_human_readable(total, base)}"
        for ext, total in rows
    ]

def render_largest(retained: Dict[str, Iterable[Tuple[int, str]]], base: Optional[int] = None) -> List[str]:
    """
    A bare-extension header per extension (ascending), then its files by
    size desc, path asc.
    """
    lines: List[str] = []
    for ext in sorted(retained):
        lines.append(ext)
        for size, path in sorted(retained[ext], key=lambda item: (-item[0], item[1])):
            lines.append(f"  {format_human_readable(size, base)} {display_path(path)}")
    return lines
