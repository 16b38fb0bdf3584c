"""Author ignore-list parsing and matching."""
from typing import Iterable, List, Optional

from .models import Author, IgnoreRule, RuleKind


def _parse_pair(line: str) -> Optional[IgnoreRule]:
    """Parse ``Name <email>``; return None when the line is not a pair."""
    if not line.endswith('>'):
        return None
    name, bracket, email = line[:-1].rpartition('<')
    name = name.strip()
    if not bracket or not name or not email or '<' in email or '>' in email:
        return None
    return IgnoreRule(kind=RuleKind.PAIR, name=name, email=email)


def parse_ignore_rules(raw_text: str) -> List[IgnoreRule]:
    """Parse an ignore-authors file into rules, in file order.

    Blank lines and ``#`` comments are dropped. A line that does not parse as
    ``Name <email>`` becomes a bare rule matched against name or email.
    """
    rules = []
    for line in raw_text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        line = line.split('#', 1)[0].strip()
        if not line:
            continue
        rules.append(_parse_pair(line) or IgnoreRule(kind=RuleKind.VALUE, value=line))
    return rules


def rule_matches(rule: IgnoreRule, author: Author) -> bool:
    if rule.kind is RuleKind.PAIR:
        if author.name and rule.name != author.name:
            return False
        return not author.email or rule.email == author.email
    return bool(rule.value) and rule.value in (author.name, author.email)


def is_author_ignored(rules: Iterable[IgnoreRule], author: Author) -> bool:
    """Check whether the author matches any ignore rule."""
    return any(rule_matches(rule, author) for rule in rules)
