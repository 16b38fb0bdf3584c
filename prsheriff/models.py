"""Shared models for pr-sheriff."""
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RuleKind(str, Enum):
    VALUE = "value"
    PAIR = "pair"


@dataclass(frozen=True)
class Author:
    name: Optional[str]
    email: Optional[str] = None


@dataclass(frozen=True)
class IgnoreRule:
    """One line of an ignore-authors list.

    ``VALUE`` rules carry a bare ``value`` that may be either a login or an
    email address; ``PAIR`` rules carry both ``name`` and ``email``.
    """

    kind: RuleKind
    value: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class ParsedTitle:
    type: str
    scopes: List[str]
    breaking: bool
    message: Optional[str]


class ValidationConfig(BaseModel):
    """Allow-lists and flags applied to a single title validation."""

    model_config = ConfigDict(frozen=True)

    types: FrozenSet[str] = Field(description="Allowed commit types")
    scopes: FrozenSet[str] = Field(default_factory=frozenset, description="Allowed commit scopes")
    enforce_scopes: bool = Field(default=False, description="Reject scopes missing from the allow-list")
    allow_breaking: bool = Field(default=True, description="Accept the '!' breaking-change marker")


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, reason: str) -> "ValidationResult":
        return cls(valid=False, reason=reason)


class CheckOutcome(BaseModel):
    valid: bool
    skipped: bool = Field(default=False, description="Validation was bypassed for an ignored author")
    reason: Optional[str] = None
