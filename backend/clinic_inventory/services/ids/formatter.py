"""Pure formatting helpers turning sequence values into business IDs."""

import re


def _check_seq(seq: int, width: int) -> None:
    if seq < 0:
        raise ValueError(f"Sequence value must be non-negative, got {seq}")
    if width < 1:
        raise ValueError(f"Width must be at least 1, got {width}")


def format_padded_id(prefix: str, seq: int, width: int) -> str:
    """Format `seq` zero-padded to `width` digits after `prefix`.

    The numeric part grows past `width` instead of being truncated, so
    values never wrap into an already issued ID.

        >>> format_padded_id("MED", 1, 5)
        'MED00001'
        >>> format_padded_id("MED", 100000, 5)
        'MED100000'
    """
    _check_seq(seq, width)
    return f"{prefix}{seq:0{width}d}"


def format_dated_id(prefix: str, year: int, month: int, seq: int, width: int) -> str:
    """Format a month-scoped ID as `<prefix>-<YYYY><MM>-<seq>`.

        >>> format_dated_id("ORD", 2025, 1, 3, 3)
        'ORD-202501-003'
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    if year < 0:
        raise ValueError(f"Year must be non-negative, got {year}")
    _check_seq(seq, width)
    return f"{prefix}-{year:04d}{month:02d}-{seq:0{width}d}"


def parse_sequence_number(prefix: str, business_id: str) -> int | None:
    """Extract the trailing sequence number from an ID produced by the formatters.

    Returns None when `business_id` does not start with `prefix` or has no
    trailing digits.

        >>> parse_sequence_number("MED", "MED00042")
        42
        >>> parse_sequence_number("ORD-202501-", "ORD-202501-007")
        7
    """
    if not business_id.startswith(prefix):
        return None
    match = re.fullmatch(r"(\d+)", business_id[len(prefix) :])
    if match is None:
        return None
    return int(match.group(1))
