from __future__ import annotations

import pytest

from school_records.config.settings import settings
from school_records.schemas.access import AccessDecision
from school_records.schemas.common.enums import Decision


def test_grant_carries_context_and_no_restrictions():
    decision = AccessDecision.grant(
        "homeroom staff", user_id="u-17", resource="students", action="read"
    )

    assert decision.decision == Decision.GRANTED
    assert decision.granted is True
    assert decision.reason == "homeroom staff"
    assert decision.reasons == ["homeroom staff"]
    assert decision.user_id == "u-17"
    assert decision.is_conditional is False
    assert decision.has_restrictions is False


def test_deny_is_audited_unless_overridden():
    denied = AccessDecision.deny("no enrollment")

    assert denied.decision == Decision.DENIED
    assert denied.reason == "no enrollment"
    assert denied.reasons == ["no enrollment"]
    assert AccessDecision.deny("no enrollment").requires_audit is True
    assert AccessDecision.deny("no enrollment", requires_audit=False).requires_audit is False
    assert AccessDecision.deny().granted is False
    assert AccessDecision.deny().reason is None


def test_conditional_defaults_record_cap():
    decision = AccessDecision.conditional("outside own section", masked_fields=["ssn"])

    assert decision.granted is True
    assert decision.is_conditional is True
    assert decision.reason == "outside own section"
    assert decision.reasons == ["outside own section"]
    assert decision.max_records == settings.DEFAULT_MAX_RECORDS
    assert decision.has_restrictions is True
    assert decision.is_field_masked("ssn")
    assert not decision.is_field_masked("first_name")


def test_conditional_keeps_explicit_restrictions():
    decision = AccessDecision.conditional(
        max_records=25, data_restrictions={"campus_id": 3}
    )

    assert decision.max_records == 25
    assert decision.data_restrictions == {"campus_id": 3}


def test_granted_flag_must_match_decision():
    with pytest.raises(ValueError):
        AccessDecision(decision=Decision.DENIED, granted=True)
    with pytest.raises(ValueError):
        AccessDecision(decision=Decision.CONDITIONAL, granted=False)


def test_negative_record_cap_rejected():
    with pytest.raises(ValueError):
        AccessDecision.conditional(max_records=-1)


def test_mutators_initialise_missing_collections():
    decision = AccessDecision(
        decision=Decision.GRANTED,
        granted=True,
        reasons=None,
        applied_permissions=None,
        masked_fields=None,
        data_restrictions=None,
    )

    decision.add_reason("admin")
    decision.add_applied_permission("STUDENT_READ")
    decision.add_masked_field("dob")
    decision.add_masked_field("dob")
    decision.add_data_restriction("grade_level", "9")

    assert decision.reasons == ["admin"]
    assert decision.applied_permissions == ["STUDENT_READ"]
    assert decision.masked_fields == ["dob"]
    assert decision.data_restrictions == {"grade_level": "9"}
    assert decision.has_restrictions is True
