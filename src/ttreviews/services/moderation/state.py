"""
Submission status state machine.

States:
    pending → awaiting_second_approval → approved
       ↓               ↓
    rejected        rejected

``approved`` and ``rejected`` are terminal. Approval transitions are driven
by the number of distinct approving moderators in the log, so the status
stored on a submission is always a projection of that log.
"""

from ttreviews.errors.exceptions import AlreadyFinalizedError, InvalidTransitionError
from ttreviews.models.enums import SubmissionStatus

REQUIRED_APPROVALS = 2

VALID_TRANSITIONS: dict[SubmissionStatus, set[SubmissionStatus]] = {
    SubmissionStatus.PENDING: {
        SubmissionStatus.AWAITING_SECOND_APPROVAL,
        SubmissionStatus.APPROVED,
        SubmissionStatus.REJECTED,
    },
    SubmissionStatus.AWAITING_SECOND_APPROVAL: {
        SubmissionStatus.APPROVED,
        SubmissionStatus.REJECTED,
    },
    SubmissionStatus.APPROVED: set(),
    SubmissionStatus.REJECTED: set(),
}


def status_after_approval(approver_count: int, required: int = REQUIRED_APPROVALS) -> SubmissionStatus:
    """Status implied by ``approver_count`` distinct approvals."""
    if approver_count <= 0:
        return SubmissionStatus.PENDING
    if approver_count >= required:
        return SubmissionStatus.APPROVED
    return SubmissionStatus.AWAITING_SECOND_APPROVAL


def ensure_transition(current: str, target: SubmissionStatus) -> None:
    """Raise unless ``current`` may move to ``target``.

    Staying in a non-terminal state is allowed.
    """
    current_status = SubmissionStatus(current)
    if current_status.is_terminal:
        raise AlreadyFinalizedError(current_status)
    if target != current_status and target not in VALID_TRANSITIONS[current_status]:
        raise InvalidTransitionError(current_status, target)
