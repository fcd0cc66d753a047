"""Cast credit filtering and character name extraction."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..constants.config import CREDIT_DENYLIST, CREDIT_SEPARATOR, MAX_CREDIT_LENGTH
from ..utils.normalization import collapse_whitespace, normalize_text

logger = logging.getLogger(__name__)

# A character name ends where an annotation starts: "Name, the ...", "Name (uncredited)" or "(uncredited)"
_ANNOTATION_BOUNDARY_RE = re.compile(r"[,(]")


@dataclass(frozen=True)
class CreditRule:
    """A named predicate; a credit is rejected when the predicate returns True."""

    description: str
    rejects: Callable[[str], bool]


def _denylist_rule(term: str) -> CreditRule:
    return CreditRule(f"contains {term!r}", lambda credit: term in credit)


CREDIT_RULES: List[CreditRule] = [
    CreditRule(
        f"missing {CREDIT_SEPARATOR.strip()!r} separator",
        lambda credit: CREDIT_SEPARATOR not in credit,
    ),
    CreditRule(
        f"longer than {MAX_CREDIT_LENGTH} characters",
        lambda credit: len(credit) > MAX_CREDIT_LENGTH,
    ),
    *(_denylist_rule(term) for term in CREDIT_DENYLIST),
]


def rejection_reason(credit: str, rules: Sequence[CreditRule] = CREDIT_RULES) -> Optional[str]:
    """Return the description of the first rule rejecting the credit, or None if it passes."""
    for rule in rules:
        if rule.rejects(credit):
            return rule.description
    return None


def filter_credits(credits: Sequence[str], rules: Sequence[CreditRule] = CREDIT_RULES) -> List[str]:
    """
    Keep only credits that pass every rule.

    Args:
        credits: Raw cast credit strings for one episode
        rules: Ordered rule chain, evaluated first to last

    Returns:
        Surviving credits with whitespace collapsed, in their original order
    """
    kept: List[str] = []
    for raw in credits:
        credit = collapse_whitespace(raw)
        reason = rejection_reason(credit, rules)
        if reason is not None:
            logger.debug("Dropping credit %r: %s", credit, reason)
            continue
        kept.append(credit)
    return kept


def extract_character_name(credit: str) -> str:
    """
    Get the character name from a credit like 'Kyle MacLachlan as Dale Cooper'.

    Takes everything after the last ' as ' up to the first annotation
    boundary (a comma or an opening parenthesis).
    """
    _, _, role = credit.rpartition(CREDIT_SEPARATOR)
    role = _ANNOTATION_BOUNDARY_RE.split(role, maxsplit=1)[0]
    return normalize_text(role)


def characters_from_credits(
    credits: Sequence[str],
    rules: Sequence[CreditRule] = CREDIT_RULES,
) -> List[str]:
    """Filter an episode's cast credits and return the character names, in credit order."""
    names: List[str] = []
    for credit in filter_credits(credits, rules):
        name = extract_character_name(credit)
        if name:
            names.append(name)
        else:
            logger.debug("Credit %r has an empty character name", credit)
    return names
