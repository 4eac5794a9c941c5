# =============================================================================
# core/validation.py - Contact Validation Rules
# =============================================================================
# One rule table shared by the server and the client:
# - The server stops at the first failing rule (first_issue) and reports
#   its server message.
# - The client collects every failing rule (collect_issues) and shows the
#   form hint next to each field.
#
# Everything here is pure: no storage access, no framework imports.
# Email uniqueness is checked separately by ContactService.
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

# Wire names, in the order rules are applied and fields are displayed
CONTACT_FIELDS: tuple[str, ...] = ("firstName", "lastName", "address", "email", "phone")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9][0-9]{3,14}$")
PHONE_FORMATTING = re.compile(r"[\s\-()]")


class IssueKind(str, Enum):
    """What a failing rule found wrong."""
    REQUIRED = "required"
    INVALID_EMAIL = "invalid_email"
    INVALID_PHONE = "invalid_phone"


@dataclass(frozen=True)
class FieldRule:
    """
    A single validation rule.

    Attributes:
        field: Wire name of the field the rule checks
        kind: Issue reported when the check fails
        check: Predicate over the trimmed value; True means valid
        message: Server-side error message
        hint: Client-side form hint
    """
    field: str
    kind: IssueKind
    check: Callable[[str], bool]
    message: str
    hint: str


@dataclass(frozen=True)
class ValidationIssue:
    """A rule that failed for a concrete value."""
    field: str
    kind: IssueKind
    message: str
    hint: str


# =============================================================================
# Predicates
# =============================================================================

def strip_phone_formatting(phone: str) -> str:
    """Remove spaces, hyphens and parentheses: "(202) 555-0123" -> "2025550123"."""
    return PHONE_FORMATTING.sub("", phone)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_valid_phone(phone: str) -> bool:
    """
    Check a phone number.

    After stripping formatting characters: optional leading "+", a first
    digit 1-9, then 3 to 14 more digits. No country-specific rules.
    """
    return bool(PHONE_PATTERN.match(strip_phone_formatting(phone)))


def _is_present(value: str) -> bool:
    return bool(value)


# =============================================================================
# Rule Table
# =============================================================================

CONTACT_RULES: tuple[FieldRule, ...] = (
    *(
        FieldRule(
            field=name,
            kind=IssueKind.REQUIRED,
            check=_is_present,
            message=f"{name} is required",
            hint="This field is required",
        )
        for name in CONTACT_FIELDS
    ),
    FieldRule(
        field="email",
        kind=IssueKind.INVALID_EMAIL,
        check=is_valid_email,
        message="Invalid email format",
        hint="Please enter a valid email address",
    ),
    FieldRule(
        field="phone",
        kind=IssueKind.INVALID_PHONE,
        check=is_valid_phone,
        message="Invalid phone number format",
        hint="Please enter a valid phone number",
    ),
)


# =============================================================================
# Public API
# =============================================================================

def normalize_contact_fields(data: Mapping[str, Any]) -> dict[str, str]:
    """
    Pick the five contact fields out of `data` and trim them.

    Missing keys and None become "". Non-string values are converted with
    str() so the rules can report on them instead of crashing.

    Args:
        data: Mapping keyed by wire names (firstName, lastName, ...)

    Returns:
        Dict with exactly the CONTACT_FIELDS keys
    """
    normalized = {}
    for name in CONTACT_FIELDS:
        value = data.get(name)
        normalized[name] = "" if value is None else str(value).strip()
    return normalized


def collect_issues(data: Mapping[str, Any]) -> list[ValidationIssue]:
    """
    Run every rule and return all failures.

    Format rules only run on non-empty values, so an empty email yields a
    single "required" issue rather than two.
    """
    fields = normalize_contact_fields(data)
    issues: list[ValidationIssue] = []

    for rule in CONTACT_RULES:
        value = fields[rule.field]
        if rule.kind is not IssueKind.REQUIRED and not value:
            continue
        if not rule.check(value):
            issues.append(ValidationIssue(rule.field, rule.kind, rule.message, rule.hint))

    return issues


def first_issue(data: Mapping[str, Any]) -> ValidationIssue | None:
    """Return the first failing rule in table order, or None if `data` is valid."""
    issues = collect_issues(data)
    return issues[0] if issues else None


def field_errors(issues: list[ValidationIssue]) -> dict[str, str]:
    """
    Map field name -> client hint, keeping the first hint per field.

    Used by the client to show one message under each form input.
    """
    errors: dict[str, str] = {}
    for issue in issues:
        errors.setdefault(issue.field, issue.hint)
    return errors
