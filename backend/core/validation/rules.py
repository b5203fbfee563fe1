"""Rule String Parser

A rule string declares the checks for one field, e.g.
``required|enum(HOURS|DAYS|WEEKS|default:DAYS)``. Tokens are separated by
``|`` at parenthesis depth zero, so parameter lists may contain pipes.
Each token is a rule name with an optional parenthesized parameter group
whose interior is kept raw and unsplit.

The scanner is lenient: it never raises. An unclosed group takes the rest
of the token as its parameters, a stray ``)`` at depth zero is kept as an
ordinary character, and text after a closed group is dropped. Each of
these is logged as ``rule_string_malformed``.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from core.logging import rules_logger

log = rules_logger()

SEPARATOR = "|"
OPEN, CLOSE = "(", ")"


@dataclass(frozen=True, slots=True)
class RuleToken:
    """One parsed rule: a name plus its raw parameter string."""
    name: str
    params: str = ""

    def __str__(self) -> str:
        return f"{self.name}({self.params})" if self.params else self.name


def split_rules(rule_string: str) -> list[str]:
    """Split on top-level separators. Empty segments are dropped."""
    segments: list[str] = []
    depth, start = 0, 0
    for i, ch in enumerate(rule_string):
        if ch == OPEN:
            depth += 1
        elif ch == CLOSE:
            if depth:
                depth -= 1
            else:
                log.warning("rule_string_malformed", rule_string=rule_string, reason="stray_close")
        elif ch == SEPARATOR and depth == 0:
            segments.append(rule_string[start:i])
            start = i + 1
    segments.append(rule_string[start:])
    if depth:
        log.warning("rule_string_malformed", rule_string=rule_string, reason="unclosed_group")
    return [s.strip() for s in segments if s.strip()]


def parse_token(segment: str) -> RuleToken:
    """Extract the rule name and the interior of its first parameter group."""
    open_at = segment.find(OPEN)
    if open_at < 0:
        return RuleToken(name=segment.strip())

    name = segment[:open_at].strip()
    depth = 0
    for i in range(open_at, len(segment)):
        ch = segment[i]
        if ch == OPEN:
            depth += 1
        elif ch == CLOSE:
            depth -= 1
            if depth == 0:
                if segment[i + 1:].strip():
                    log.warning("rule_string_malformed", rule=segment, reason="trailing_text")
                return RuleToken(name=name, params=segment[open_at + 1:i])

    log.warning("rule_string_malformed", rule=segment, reason="unclosed_group")
    return RuleToken(name=name, params=segment[open_at + 1:])


@lru_cache(maxsize=512)
def parse_rules(rule_string: str) -> tuple[RuleToken, ...]:
    """Parse a rule string into tokens in declaration order.

    Order matters: checks short-circuit and mutate the run's data, so
    ``required|varchar`` and ``varchar|required`` are not equivalent.
    An empty rule string yields no tokens.
    """
    return tuple(parse_token(segment) for segment in split_rules(rule_string or ""))
