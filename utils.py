# utils.py

from typing import List, Optional

from config import FREE_COLOR, PROCESS_COLORS


def parse_int_list(text: str, positive_only: bool = False) -> List[int]:
    """
    Parse a comma separated string into integers.

    Entries that are not integers are skipped. With positive_only, zero and
    negative values are skipped too.
    """
    values = []
    for part in text.split(','):
        part = part.strip()
        if not part:
            continue
        try:
            value = int(part)
        except ValueError:
            continue
        if positive_only and value <= 0:
            continue
        values.append(value)
    return values


def process_label(index: int) -> str:
    """Display name of the process at a 0-based position."""
    return f"P{index + 1}"


def get_color(slot: Optional[int]) -> str:
    """Return a color for a process palette slot, or the free color for None."""
    if slot is None:
        return FREE_COLOR
    return PROCESS_COLORS[slot % len(PROCESS_COLORS)]
