"""Version string parsing and comparison for the update gate."""
import logging
from typing import Tuple

logger = logging.getLogger(__name__)

def parse_version(version_str: str) -> Tuple[int, ...]:
    """
    Parse a dotted version string into a tuple of integers.

    Raises:
        ValueError: if any segment is not a non-negative decimal integer
    """
    parts = version_str.split('.')
    for part in parts:
        if not part.isdigit():
            raise ValueError(f"Invalid version segment {part!r} in {version_str!r}")
    return tuple(int(part) for part in parts)

def is_update_required(current: str, required: str) -> bool:
    """
    Check if the current version is strictly lower than the required one.

    Shorter versions are padded with zeros, so "2.1" and "2.1.0" are equal.
    Malformed versions never raise; they are logged and treated as
    "no update required".
    """
    try:
        current_parts = parse_version(current)
        required_parts = parse_version(required)
    except (ValueError, AttributeError) as e:
        logger.warning(f"Error comparing versions: {e}. Assuming no update is required.")
        return False

    max_len = max(len(current_parts), len(required_parts))
    for i in range(max_len):
        current_p = current_parts[i] if i < len(current_parts) else 0
        required_p = required_parts[i] if i < len(required_parts) else 0

        if current_p < required_p:
            return True
        if current_p > required_p:
            return False

    # Same version
    return False
