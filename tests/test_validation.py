# =============================================================================
# tests/test_validation.py - Validation Rule Tests
# =============================================================================
# Tests for the shared rule table in core/validation.py:
# - Required fields (after trimming)
# - Email and phone formats
# - First-issue (server) vs all-issues (client) reporting
#
# Run with: pytest tests/test_validation.py -v
# =============================================================================

import pytest

from core.validation import (
    CONTACT_FIELDS,
    CONTACT_RULES,
    IssueKind,
    collect_issues,
    field_errors,
    first_issue,
    is_valid_email,
    is_valid_phone,
    normalize_contact_fields,
    strip_phone_formatting,
)


# =============================================================================
# Email
# =============================================================================

class TestEmail:
    """Tests for the email pattern."""

    @pytest.mark.parametrize("email", [
        "ann@example.com",
        "a.b+c@sub.example.org",
        "x@y.z",
    ])
    def test_valid_emails(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", [
        "ann",
        "ann@example",
        "@example.com",
        "ann@.com",
        "ann @example.com",
        "ann@@example.com",
        "ann@example.",
    ])
    def test_invalid_emails(self, email):
        assert not is_valid_email(email)


# =============================================================================
# Phone
# =============================================================================

class TestPhone:
    """Tests for the phone rule (4-15 digits, no leading zero)."""

    def test_strip_formatting(self):
        assert strip_phone_formatting("(202) 555-0123") == "2025550123"
        assert strip_phone_formatting("+1 202-555-0123") == "+12025550123"

    @pytest.mark.parametrize("phone", [
        "+12025550123",
        "(202) 555-0123",
        "1234",                 # shortest: 4 digits
        "123456789012345",      # longest: 15 digits
        "+44 20 7946 0958",
    ])
    def test_valid_phones(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", [
        "not-a-phone",
        "123",                  # too short
        "1234567890123456",     # 16 digits
        "0123456",              # leading zero
        "+0123456",
        "12.34.56",
        "++12345",
    ])
    def test_invalid_phones(self, phone):
        assert not is_valid_phone(phone)


# =============================================================================
# Rule Table
# =============================================================================

class TestRules:
    """Tests for collect_issues / first_issue."""

    def test_rule_order_is_required_then_email_then_phone(self):
        kinds = [rule.kind for rule in CONTACT_RULES]
        assert kinds[:5] == [IssueKind.REQUIRED] * 5
        assert kinds[5:] == [IssueKind.INVALID_EMAIL, IssueKind.INVALID_PHONE]
        assert [rule.field for rule in CONTACT_RULES[:5]] == list(CONTACT_FIELDS)

    def test_valid_contact_has_no_issues(self, ann):
        assert collect_issues(ann) == []
        assert first_issue(ann) is None

    def test_whitespace_only_is_missing(self, ann):
        ann["lastName"] = "   "
        issue = first_issue(ann)

        assert issue.field == "lastName"
        assert issue.kind is IssueKind.REQUIRED
        assert issue.message == "lastName is required"
        assert issue.hint == "This field is required"

    def test_missing_key_and_none_are_missing(self, ann):
        del ann["address"]
        ann["phone"] = None

        fields = {issue.field for issue in collect_issues(ann)}

        assert fields == {"address", "phone"}

    def test_first_issue_follows_table_order(self, ann):
        ann["phone"] = "bad"
        ann["email"] = "bad"
        ann["firstName"] = ""

        assert first_issue(ann).field == "firstName"

        ann["firstName"] = "Ann"
        assert first_issue(ann).message == "Invalid email format"

        ann["email"] = "ann@example.com"
        assert first_issue(ann).message == "Invalid phone number format"

    def test_empty_email_reports_required_only(self, ann):
        ann["email"] = ""

        issues = collect_issues(ann)

        assert len(issues) == 1
        assert issues[0].kind is IssueKind.REQUIRED

    def test_collect_all_issues_for_client(self):
        issues = collect_issues({"email": "nope", "phone": "12"})

        assert [i.field for i in issues] == ["firstName", "lastName", "address", "email", "phone"]
        assert field_errors(issues) == {
            "firstName": "This field is required",
            "lastName": "This field is required",
            "address": "This field is required",
            "email": "Please enter a valid email address",
            "phone": "Please enter a valid phone number",
        }

    def test_values_are_checked_after_trimming(self, ann):
        ann["email"] = "  ann@example.com  "
        ann["phone"] = " +12025550123 "

        assert first_issue(ann) is None


class TestNormalize:
    """Tests for normalize_contact_fields."""

    def test_picks_and_trims_known_fields(self, ann):
        ann["firstName"] = "  Ann "
        ann["extra"] = "ignored"

        fields = normalize_contact_fields(ann)

        assert set(fields) == set(CONTACT_FIELDS)
        assert fields["firstName"] == "Ann"

    def test_missing_becomes_empty_string(self):
        assert normalize_contact_fields({}) == {name: "" for name in CONTACT_FIELDS}
