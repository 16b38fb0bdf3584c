"""Title validation using Chain of Responsibility pattern.

Two chains are built here. The diagnostic chain runs only when a title does
not match the grammar and turns the mismatch into the most specific reason it
can find. The policy chain runs on a title that did match and enforces the
configured allow-lists.
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..models import ParsedTitle, ValidationConfig

GENERIC_FORMAT_REASON = 'title must follow "<type>(<scope>)?: <message>" format'


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, subject: Any, config: Optional[ValidationConfig] = None) -> Tuple[bool, str]:
        """Handle validation and pass to next handler if valid."""
        result = self.validate(subject, config)
        if not result[0] or not self.next_handler:
            return result
        return self.next_handler.handle(subject, config)

    @abstractmethod
    def validate(self, subject: Any, config: Optional[ValidationConfig]) -> Tuple[bool, str]:
        """Validate the subject."""
        pass


@dataclass(frozen=True)
class TitleSegments:
    """A malformed title cut at its first colon."""

    title: str
    header: str
    rest: Optional[str]
    scope: Optional[str]


def split_title(title: str) -> TitleSegments:
    header, colon, rest = title.partition(':')
    scope_match = re.search(r'\(([^)]*)\)', header)
    return TitleSegments(
        title=title,
        header=header,
        rest=rest if colon else None,
        scope=scope_match.group(1) if scope_match else None,
    )


# Diagnostic predicates

def has_uppercase_type(segments: TitleSegments) -> bool:
    return bool(re.match(r'[A-Z]', segments.header.split('(')[0]))


def has_extra_spaces(segments: TitleSegments) -> bool:
    if re.search(r'\s\(', segments.header):
        return True
    if segments.rest is None:
        return False
    return segments.header != segments.header.rstrip()


def has_pipe_scopes(segments: TitleSegments) -> bool:
    return segments.scope is not None and '|' in segments.scope


def has_spaced_scopes(segments: TitleSegments) -> bool:
    scope = segments.scope
    return scope is not None and bool(scope.strip()) and bool(re.search(r'\s', scope))


def has_empty_scope(segments: TitleSegments) -> bool:
    return segments.scope is not None and not segments.scope.strip()


DiagnosticRule = Tuple[Callable[[TitleSegments], bool], str]

DIAGNOSTIC_RULES: Sequence[DiagnosticRule] = (
    (has_uppercase_type, "type must be lowercase"),
    (has_extra_spaces, "extra spaces around type, scope, or colon are not allowed"),
    (has_pipe_scopes, "scopes must be comma-separated, not pipe-separated"),
    (has_spaced_scopes, "scopes must not contain spaces"),
    (has_empty_scope, "scope cannot be empty"),
)


class DiagnosticRuleHandler(ValidationHandler):
    """Fails with ``reason`` when ``predicate`` recognises the malformation."""

    def __init__(
        self,
        predicate: Callable[[TitleSegments], bool],
        reason: str,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(next_handler)
        self.predicate = predicate
        self.reason = reason

    def validate(self, subject: TitleSegments, config: Optional[ValidationConfig]) -> Tuple[bool, str]:
        if self.predicate(subject):
            return False, self.reason
        return True, ""


class GenericFormatHandler(ValidationHandler):
    """Terminal handler of the diagnostic chain."""

    def validate(self, subject: TitleSegments, config: Optional[ValidationConfig]) -> Tuple[bool, str]:
        return False, GENERIC_FORMAT_REASON


# Policy handlers

class MessageRequiredHandler(ValidationHandler):
    """Validates that something follows the colon."""

    def validate(self, subject: ParsedTitle, config: ValidationConfig) -> Tuple[bool, str]:
        if not subject.message or not subject.message.strip():
            return False, "commit message after colon cannot be empty"
        return True, ""


class AllowedTypeHandler(ValidationHandler):
    """Validates the type against the allow-list."""

    def validate(self, subject: ParsedTitle, config: ValidationConfig) -> Tuple[bool, str]:
        if subject.type not in config.types:
            return False, f'type "{subject.type}" is not allowed'
        return True, ""


class BreakingChangeTypeHandler(ValidationHandler):
    """Rejects a redundant '!' on the BREAKING CHANGE type."""

    def validate(self, subject: ParsedTitle, config: ValidationConfig) -> Tuple[bool, str]:
        if subject.type == "BREAKING CHANGE" and subject.breaking:
            return False, "BREAKING CHANGE must not include '!'"
        return True, ""


class ScopeMembershipHandler(ValidationHandler):
    """Validates every scope against the allow-list when enforcement is on."""

    def validate(self, subject: ParsedTitle, config: ValidationConfig) -> Tuple[bool, str]:
        if not subject.scopes or not config.enforce_scopes:
            return True, ""
        invalid: List[str] = [scope for scope in subject.scopes if scope not in config.scopes]
        if invalid:
            noun = "scopes" if len(invalid) > 1 else "scope"
            return False, f"invalid {noun}: {', '.join(invalid)}"
        return True, ""


class BreakingAllowedHandler(ValidationHandler):
    """Validates the '!' marker against the breaking-change policy."""

    def validate(self, subject: ParsedTitle, config: ValidationConfig) -> Tuple[bool, str]:
        if subject.breaking and not config.allow_breaking:
            return False, "breaking changes are not allowed"
        return True, ""


def create_diagnostic_chain(rules: Sequence[DiagnosticRule] = DIAGNOSTIC_RULES) -> ValidationHandler:
    """Create the chain that explains a grammar mismatch, first rule first."""
    chain: ValidationHandler = GenericFormatHandler()
    for predicate, reason in reversed(rules):
        chain = DiagnosticRuleHandler(predicate, reason, chain)
    return chain


def create_policy_chain() -> ValidationHandler:
    """Create the default policy chain for grammatically valid titles."""
    breaking_allowed = BreakingAllowedHandler()
    scopes = ScopeMembershipHandler(breaking_allowed)
    breaking_type = BreakingChangeTypeHandler(scopes)
    allowed_type = AllowedTypeHandler(breaking_type)
    message_required = MessageRequiredHandler(allowed_type)

    return message_required
