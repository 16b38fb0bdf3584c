"""Pull-request title validation package."""

from .validation import (
    DIAGNOSTIC_RULES,
    ValidationHandler,
    create_diagnostic_chain,
    create_policy_chain,
)
from .validator import TitleValidator, validate_title

__all__ = [
    'DIAGNOSTIC_RULES',
    'ValidationHandler',
    'create_diagnostic_chain',
    'create_policy_chain',
    'TitleValidator',
    'validate_title',
]
