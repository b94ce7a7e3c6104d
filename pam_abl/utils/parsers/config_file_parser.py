"""
pam_abl configuration file parser.

The file is a list of ``name = value`` assignments:

    # /etc/security/pam_abl.conf
    db_home = /var/lib/abl
    host_rule = *:10/1h,30/1d
    host_purge = 2d
    host_blk_cmd = [iptables] [-I] [INPUT] [-s] [%h] [-j] [DROP]
    user_whitelist = root;admin

An unescaped ``#`` starts a comment and a trailing ``\\`` joins a line with
the next one.
"""
import ipaddress
import logging
from typing import Any, Callable, Dict, Iterator, List, Tuple

from pam_abl.core.exceptions import ConfigError, ConfigFileError
from pam_abl.schemas.abl_config import AblConfig
from pam_abl.utils.parsers.command_parser import split_command
from pam_abl.utils.parsers.rule_parser import parse_duration, parse_limits, parse_rule

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean setting value."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigFileError(f"Invalid boolean value: {value!r}")


def parse_whitelist(value: str) -> List[str]:
    """Split a ``;``-separated whitelist."""
    return [entry.strip() for entry in value.split(";") if entry.strip()]


def parse_host_whitelist(value: str) -> List[str]:
    """Split a host whitelist and check every entry is an address or network."""
    entries = parse_whitelist(value)
    for entry in entries:
        try:
            ipaddress.ip_network(entry, strict=False)
        except ValueError as e:
            raise ConfigFileError(f"Invalid host whitelist entry: {entry!r}") from e
    return entries


def _trailing_escapes(text: str) -> int:
    count = 0
    for char in reversed(text):
        if char != "\\":
            break
        count += 1
    return count


def strip_comment(line: str) -> str:
    """Remove an unescaped ``#`` comment from a line."""
    for index, char in enumerate(line):
        if char == "#" and _trailing_escapes(line[:index]) % 2 == 0:
            return line[:index]
    return line


class AblConfigParser:
    """Parser for pam_abl configuration files."""

    # Setting name -> value parser
    SETTINGS: Dict[str, Callable[[str], Any]] = {
        "debug": parse_bool,
        "db_home": str.strip,
        "db_module": str.strip,
        "limits": parse_limits,
        "host_rule": parse_rule,
        "host_purge": parse_duration,
        "host_whitelist": parse_host_whitelist,
        "host_blk_cmd": split_command,
        "host_clr_cmd": split_command,
        "user_rule": parse_rule,
        "user_purge": parse_duration,
        "user_whitelist": parse_whitelist,
        "user_blk_cmd": split_command,
        "user_clr_cmd": split_command,
    }

    def __init__(self, config_content: str):
        """
        Initialize parser with config content.

        Args:
            config_content: The configuration file content as string
        """
        self.config_content = config_content
        self.lines = config_content.splitlines()

    def logical_lines(self) -> Iterator[Tuple[int, str]]:
        """
        Yield (line number, text) for each non-empty logical line.

        Comments are removed and continued lines are joined; the line number
        is the one the logical line started on.
        """
        buffer = ""
        start = None
        for number, line in enumerate(self.lines, start=1):
            text = strip_comment(line).rstrip()
            if start is None:
                start = number
            if _trailing_escapes(text) % 2 == 1:
                buffer += text[:-1]
                continue
            buffer += text
            if buffer.strip():
                yield start, buffer.strip()
            buffer = ""
            start = None

        if buffer.strip():
            yield start, buffer.strip()

    def parse_assignments(self) -> List[Tuple[int, str, str]]:
        """Split logical lines into (line number, name, value) assignments."""
        assignments = []
        for number, text in self.logical_lines():
            name, sep, value = text.partition("=")
            name = name.strip()
            if not sep or not name:
                raise ConfigFileError(f"Expected 'name = value', got {text!r}", number)
            assignments.append((number, name, value.strip()))
        return assignments

    def parse(self) -> AblConfig:
        """
        Parse the whole file. Later assignments override earlier ones.

        Returns:
            AblConfig with every recognized setting applied

        Raises:
            ConfigFileError: On malformed lines, unknown names or bad values
        """
        values: Dict[str, Any] = {}
        for number, name, value in self.parse_assignments():
            value_parser = self.SETTINGS.get(name)
            if value_parser is None:
                logger.warning(f"Unknown setting {name!r} on line {number}")
                raise ConfigFileError(f"Unknown setting {name!r}", number)
            try:
                parsed = value_parser(value)
            except ConfigFileError as e:
                raise ConfigFileError(e.message, number) from e
            except ConfigError as e:
                raise ConfigFileError(f"Invalid value for {name!r}: {e}", number) from e

            if name == "limits":
                values["lower_limit"], values["upper_limit"] = parsed
            else:
                values[name] = parsed

        config = AblConfig(**values)
        logger.debug(f"Parsed configuration with {len(values)} setting(s)")
        return config
