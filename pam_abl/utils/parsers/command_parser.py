"""
Bracket directive parser for command settings.

A command setting such as ``host_blk_cmd`` holds the program and its
arguments as bracketed fields:

    [iptables] [-I] [INPUT] [-s] [%h] [-j] [DROP]

Text outside brackets is ignored, so a value may carry a human readable
label next to the directive. Inside a field a backslash escapes the next
character, which is how literal brackets and backslashes are written.
"""
import logging
from typing import Iterator, List, Optional, Sequence

from pam_abl.core.exceptions import CommandSyntaxError

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"
OPEN_CHAR = "["
CLOSE_CHAR = "]"


def _scan_fields(raw: str) -> Iterator[str]:
    """
    Yield decoded fields in the order their closing brackets appear.

    Raises CommandSyntaxError on nested open brackets, unterminated fields
    and a trailing escape character. Callers that need all-or-nothing
    behaviour must exhaust the iterator before using any field.
    """
    field: Optional[List[str]] = None  # None while outside brackets
    escaped = False

    for position, char in enumerate(raw):
        if escaped:
            escaped = False
            if field is not None:
                field.append(char)
            continue

        if char == ESCAPE_CHAR:
            escaped = True
        elif field is None:
            if char == OPEN_CHAR:
                field = []
        elif char == OPEN_CHAR:
            raise CommandSyntaxError("Nested '[' inside a field", position)
        elif char == CLOSE_CHAR:
            yield "".join(field)
            field = None
        else:
            field.append(char)

    if escaped:
        raise CommandSyntaxError("Dangling escape character at end of input", len(raw) - 1)
    if field is not None:
        raise CommandSyntaxError("Unterminated '[' field", len(raw))


def split_command(raw: str) -> List[str]:
    """
    Split a bracket directive into its fields.

    Args:
        raw: The raw configuration value

    Returns:
        Decoded fields in order; empty list if the value holds no brackets

    Raises:
        CommandSyntaxError: If the directive is malformed
    """
    if not raw:
        return []

    try:
        parts = list(_scan_fields(raw))
    except CommandSyntaxError as e:
        logger.warning(f"Rejected command directive {raw!r}: {e}")
        raise

    logger.debug(f"Split command {raw!r} into {len(parts)} part(s)")
    return parts


def count_command_parts(raw: str) -> int:
    """
    Count the fields of a bracket directive without keeping them.

    Always equal to ``len(split_command(raw))`` and raises the same errors.
    """
    if not raw:
        return 0
    return sum(1 for _ in _scan_fields(raw))


def expand_command(
    parts: Sequence[str],
    user: Optional[str] = None,
    host: Optional[str] = None,
    service: Optional[str] = None,
) -> List[str]:
    """
    Substitute placeholders in command fields.

    ``%u`` becomes the user, ``%h`` the host, ``%s`` the service and ``%%`` a
    literal percent sign. Missing values expand to an empty string; any
    other ``%`` sequence is kept as is.

    Args:
        parts: Fields returned by split_command
        user: User name
        host: Remote host
        service: PAM service name

    Returns:
        New list of expanded fields
    """
    substitutions = {
        "u": user or "",
        "h": host or "",
        "s": service or "",
        "%": "%",
    }

    expanded = []
    for part in parts:
        out = []
        i = 0
        while i < len(part):
            char = part[i]
            if char == "%" and i + 1 < len(part) and part[i + 1] in substitutions:
                out.append(substitutions[part[i + 1]])
                i += 2
                continue
            out.append(char)
            i += 1
        expanded.append("".join(out))
    return expanded
