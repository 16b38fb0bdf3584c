"""Pull-request title validation."""
import re
from typing import Any, Optional

from ..models import ParsedTitle, ValidationConfig, ValidationResult
from .validation import create_diagnostic_chain, create_policy_chain, split_title

# <type>(<scope1,scope2>)!: <message>
TITLE_PATTERN = re.compile(
    r'^(BREAKING CHANGE|[a-z]+)'
    r'(?:\(([a-z0-9-]+(?:,[a-z0-9-]+)*)\))?'
    r'(!?)'
    r':(?: (\S.*))?$'
)

SKIP_CI_PATTERN = re.compile(r'\s*\[\s*skip-ci\s*\]$', re.IGNORECASE)


class TitleValidator:
    """Validates pull-request titles against the Conventional-Commits grammar.

    A title is matched in a single pass. Only when that fails does the
    diagnostic chain run to pick a precise reason; titles that match go through
    the policy chain, where the first failing handler wins.
    """

    def __init__(self):
        self.diagnostic_chain = create_diagnostic_chain()
        self.policy_chain = create_policy_chain()

    def parse(self, title: str) -> Optional[ParsedTitle]:
        """Parse a trimmed title, or return None when it does not match."""
        match = TITLE_PATTERN.match(title)
        if not match:
            return None
        commit_type, scope, bang, message = match.groups()
        return ParsedTitle(
            type=commit_type,
            scopes=scope.split(',') if scope else [],
            breaking=bool(bang),
            message=message,
        )

    def validate(self, title: Any, config: ValidationConfig) -> ValidationResult:
        """Validate a title against the given configuration."""
        if not isinstance(title, str) or not title.strip():
            return ValidationResult.fail("title is missing or not a string")

        title = title.strip()

        # Explicit opt-out
        if SKIP_CI_PATTERN.search(title):
            return ValidationResult.ok()

        parsed = self.parse(title)
        if parsed is None:
            _, reason = self.diagnostic_chain.handle(split_title(title))
            return ValidationResult.fail(reason)

        is_valid, reason = self.policy_chain.handle(parsed, config)
        if not is_valid:
            return ValidationResult.fail(reason)
        return ValidationResult.ok()


_default_validator = TitleValidator()


def validate_title(title: Any, config: ValidationConfig) -> ValidationResult:
    """Validate ``title`` with a shared, stateless validator."""
    return _default_validator.validate(title, config)
