"""The PMC deposit workflow.

States, labels, tags and transitions for deposits sent to PubMed Central,
together with the tramline critical path and its mutually exclusive
alternates.
"""

from __future__ import annotations

from .definition import (
    TramlineDefinition,
    Transition,
    Workflow,
    WorkflowStateDef,
    WorkflowTag,
)

DRAFT = "DRAFT"
PENDING = "PENDING"
NO_ACTION_NEEDED = "NO_ACTION_NEEDED"
DEPOSITED = "DEPOSITED"
DEPOSIT_FAILED = "DEPOSIT_FAILED"
DEPOSIT_CONFIRMED_BY_PMC = "DEPOSIT_CONFIRMED_BY_PMC"
DEPOSIT_REJECTED_BY_PMC = "DEPOSIT_REJECTED_BY_PMC"
SUBMITTERS_FILES_REQUESTED = "SUBMITTERS_FILES_REQUESTED"
REVIEWER_APPROVED_INITIAL = "REVIEWER_APPROVED_INITIAL"
REVIEWER_REJECTED_INITIAL = "REVIEWER_REJECTED_INITIAL"
NIHMS_CONVERSION_COMPLETE = "NIHMS_CONVERSION_COMPLETE"
REVIEWER_APPROVED_FINAL = "REVIEWER_APPROVED_FINAL"
AVAILABLE_ON_PMC = "AVAILABLE_ON_PMC"
WITHDRAWN_FROM_PMC = "WITHDRAWN_FROM_PMC"
FAILED = "FAILED"
CANCELLED = "CANCELLED"
REMOVED_FROM_PROCESSING = "REMOVED_FROM_PROCESSING"
REQUEST_NEW_VERSION = "REQUEST_NEW_VERSION"

_ERROR_END = frozenset({WorkflowTag.ERROR.value, WorkflowTag.END.value})
_WARNING_END = frozenset({WorkflowTag.WARNING.value, WorkflowTag.END.value})


def _state(name: str, label: str, tags: frozenset[str] = frozenset()) -> WorkflowStateDef:
    return WorkflowStateDef(name=name, label=label, tags=tags)


def _t(name: str, source: str | None, target: str) -> Transition:
    return Transition(source_state_name=source, target_state_name=target, name=name)


_STATES = (
    _state(DRAFT, "Draft"),
    _state(PENDING, "New Deposit Uploaded"),
    _state(NO_ACTION_NEEDED, "No Action Needed", frozenset({WorkflowTag.END.value})),
    _state(DEPOSITED, "Deposit Sent to PMC"),
    _state(DEPOSIT_CONFIRMED_BY_PMC, "PMC Confirmed Deposit"),
    _state(DEPOSIT_REJECTED_BY_PMC, "PMC Rejected Deposit", _ERROR_END),
    _state(SUBMITTERS_FILES_REQUESTED, "Additional Files Requested", _WARNING_END),
    _state(REVIEWER_APPROVED_INITIAL, "Reviewer Approved (Initial)"),
    _state(REVIEWER_REJECTED_INITIAL, "Reviewer Rejected (Initial)", _ERROR_END),
    _state(NIHMS_CONVERSION_COMPLETE, "NIHMS Conversion Complete"),
    _state(REVIEWER_APPROVED_FINAL, "Reviewer Approval (Final)"),
    _state(AVAILABLE_ON_PMC, "Available on PMC"),
    _state(WITHDRAWN_FROM_PMC, "Withdrawn from PMC", _WARNING_END),
    _state(FAILED, "Failed", _ERROR_END),
    _state(CANCELLED, "Cancelled", _ERROR_END),
    _state(REMOVED_FROM_PROCESSING, "Removed from Processing", _ERROR_END),
    _state(DEPOSIT_FAILED, "Deposit Failed", _ERROR_END),
    _state(REQUEST_NEW_VERSION, "New Version Requested", _WARNING_END),
)

_TRANSITIONS = (
    _t("submit_to_hhmi", DRAFT, PENDING),
    _t("send_to_pmc", PENDING, DEPOSITED),
    _t("mark_no_action_needed", PENDING, NO_ACTION_NEEDED),
    _t("confirmed_by_pmc", DEPOSITED, DEPOSIT_CONFIRMED_BY_PMC),
    _t("rejected_by_pmc", DEPOSITED, DEPOSIT_REJECTED_BY_PMC),
    _t("request_new_version_from_deposited", DEPOSITED, REQUEST_NEW_VERSION),
    _t("request_files_from_pmc_confirmed", DEPOSIT_CONFIRMED_BY_PMC, SUBMITTERS_FILES_REQUESTED),
    _t("request_files_from_pmc_rejected", DEPOSIT_REJECTED_BY_PMC, SUBMITTERS_FILES_REQUESTED),
    _t(
        "request_files_from_reviewer_approved",
        REVIEWER_APPROVED_INITIAL,
        SUBMITTERS_FILES_REQUESTED,
    ),
    _t(
        "request_files_from_reviewer_rejected",
        REVIEWER_REJECTED_INITIAL,
        SUBMITTERS_FILES_REQUESTED,
    ),
    _t("reviewer_approve_initial", DEPOSIT_CONFIRMED_BY_PMC, REVIEWER_APPROVED_INITIAL),
    _t("nihms_conversion_complete", REVIEWER_APPROVED_INITIAL, NIHMS_CONVERSION_COMPLETE),
    _t("reviewer_approve_final", NIHMS_CONVERSION_COMPLETE, REVIEWER_APPROVED_FINAL),
    _t("publish_to_pmc", REVIEWER_APPROVED_FINAL, AVAILABLE_ON_PMC),
    _t("withdraw_from_pmc", AVAILABLE_ON_PMC, WITHDRAWN_FROM_PMC),
    _t("mark_failed", None, FAILED),
    _t("cancel_deposit", None, CANCELLED),
    _t("remove_from_processing", None, REMOVED_FROM_PROCESSING),
    _t("mark_deposit_failed", PENDING, DEPOSIT_FAILED),
    _t("request_new_version_from_failed", DEPOSIT_FAILED, REQUEST_NEW_VERSION),
    _t("request_new_version_from_rejected", DEPOSIT_REJECTED_BY_PMC, REQUEST_NEW_VERSION),
    _t(
        "request_new_version_from_reviewer_rejected",
        REVIEWER_REJECTED_INITIAL,
        REQUEST_NEW_VERSION,
    ),
    _t("request_new_version_from_failed_state", FAILED, REQUEST_NEW_VERSION),
    _t("request_new_version_from_removed", REMOVED_FROM_PROCESSING, REQUEST_NEW_VERSION),
    _t("complete_cloning", REQUEST_NEW_VERSION, DRAFT),
    _t("clear_failure_from_failed", FAILED, PENDING),
    _t("clear_failure_from_deposit_failed", DEPOSIT_FAILED, PENDING),
    _t(
        "request_new_version_from_files_requested",
        SUBMITTERS_FILES_REQUESTED,
        REQUEST_NEW_VERSION,
    ),
    _t("cancel_deposit_from_files_requested", SUBMITTERS_FILES_REQUESTED, CANCELLED),
    _t(
        "mark_no_action_needed_from_files_requested",
        SUBMITTERS_FILES_REQUESTED,
        NO_ACTION_NEEDED,
    ),
)

PMC_DEPOSIT_WORKFLOW = Workflow(
    name="PMC_DEPOSIT",
    label="PMC Deposit Workflow",
    states={state.name: state for state in _STATES},
    transitions=_TRANSITIONS,
)

PMC_CRITICAL_PATH_STATES: tuple[str, ...] = (
    PENDING,
    DEPOSITED,
    DEPOSIT_CONFIRMED_BY_PMC,
    REVIEWER_APPROVED_INITIAL,
    NIHMS_CONVERSION_COMPLETE,
    REVIEWER_APPROVED_FINAL,
    AVAILABLE_ON_PMC,
)

# SUBMITTERS_FILES_REQUESTED is off the critical path; its entry only feeds
# contradiction detection.
PMC_MUTUALLY_EXCLUSIVE_STATES: dict[str, list[str]] = {
    DEPOSIT_CONFIRMED_BY_PMC: [DEPOSIT_REJECTED_BY_PMC],
    DEPOSITED: [NO_ACTION_NEEDED, DEPOSIT_FAILED],
    REVIEWER_APPROVED_INITIAL: [REVIEWER_REJECTED_INITIAL],
    SUBMITTERS_FILES_REQUESTED: [REQUEST_NEW_VERSION],
}

PMC_END_CONDITION_STATES: tuple[str, ...] = (
    FAILED,
    DEPOSIT_FAILED,
    DEPOSIT_REJECTED_BY_PMC,
    SUBMITTERS_FILES_REQUESTED,
    CANCELLED,
    REMOVED_FROM_PROCESSING,
    REVIEWER_REJECTED_INITIAL,
    REQUEST_NEW_VERSION,
    NO_ACTION_NEEDED,
)

PMC_TRAMLINE = TramlineDefinition.create(
    PMC_DEPOSIT_WORKFLOW,
    PMC_CRITICAL_PATH_STATES,
    PMC_MUTUALLY_EXCLUSIVE_STATES,
)
