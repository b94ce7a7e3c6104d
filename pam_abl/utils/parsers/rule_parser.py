"""
Parsers for rule, duration and limits values.

Rule syntax (host_rule / user_rule):

    [!]name[|name...]:count/period[,count/period...] [clause ...]

``*`` matches every name and a user name may be qualified with a service,
as in ``root/sshd``. Periods are durations such as ``30s``, ``10m``,
``1h`` or ``2d``.
"""
import re
import logging
from typing import List, Tuple

from pam_abl.core.exceptions import RuleSyntaxError
from pam_abl.schemas.abl_config import RuleClause, RuleLimit, RuleSubject

logger = logging.getLogger(__name__)

DURATION_UNITS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
}

_duration_pattern = re.compile(r'^(\d+)([smhd]?)$')
_limits_pattern = re.compile(r'^(\d+)\s*-\s*(\d+)$')


def parse_duration(text: str) -> int:
    """
    Parse a duration into seconds.

    Args:
        text: Positive integer with an optional s/m/h/d unit (seconds if omitted)

    Returns:
        Number of seconds
    """
    match = _duration_pattern.match(text.strip())
    if not match:
        raise RuleSyntaxError(f"Invalid duration: {text!r}")
    value = int(match.group(1))
    if value <= 0:
        raise RuleSyntaxError(f"Duration must be positive: {text!r}")
    return value * DURATION_UNITS[match.group(2) or "s"]


def parse_limits(text: str) -> Tuple[int, int]:
    """Parse a ``lower-upper`` limits value."""
    match = _limits_pattern.match(text.strip())
    if not match:
        raise RuleSyntaxError(f"Invalid limits (expected lower-upper): {text!r}")
    lower, upper = int(match.group(1)), int(match.group(2))
    # upper == 0 leaves the range open
    if upper and lower > upper:
        raise RuleSyntaxError(f"Lower limit {lower} exceeds upper limit {upper}")
    return lower, upper


def _parse_subject(text: str) -> RuleSubject:
    name, sep, service = text.partition("/")
    if not name or (sep and not service):
        raise RuleSyntaxError(f"Invalid rule name: {text!r}")
    return RuleSubject(name=name, service=service or None)


def _parse_limit(text: str) -> RuleLimit:
    count, sep, period = text.partition("/")
    if not sep or not count.isdigit():
        raise RuleSyntaxError(f"Invalid rule limit (expected count/period): {text!r}")
    return RuleLimit(count=int(count), period=parse_duration(period))


def parse_rule_clause(text: str) -> RuleClause:
    """Parse one ``names:limits`` clause."""
    names, sep, limits = text.partition(":")
    if not sep:
        raise RuleSyntaxError(f"Rule clause is missing ':': {text!r}")

    negated = names.startswith("!")
    if negated:
        names = names[1:]
    if not names or not limits:
        raise RuleSyntaxError(f"Incomplete rule clause: {text!r}")

    return RuleClause(
        negated=negated,
        subjects=[_parse_subject(name) for name in names.split("|")],
        limits=[_parse_limit(limit) for limit in limits.split(",")],
    )


def parse_rule(text: str) -> List[RuleClause]:
    """
    Parse a whitespace-separated list of rule clauses.

    Args:
        text: Rule value, e.g. ``*:10/1h,30/1d !root:3/1m``

    Returns:
        Parsed clauses in order
    """
    clauses = [parse_rule_clause(clause) for clause in text.split()]
    logger.debug(f"Parsed rule {text!r} into {len(clauses)} clause(s)")
    return clauses
