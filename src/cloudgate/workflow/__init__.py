"""Workflow logic for Cloudgate.

This package holds the pure pipeline workflow rules that sit between the
gateway and the interface, such as resolving which approval actions are
currently waiting for a human decision.
"""

from cloudgate.workflow.approvals import resolve_for_pipelines, resolve_pending_approvals
from cloudgate.workflow.exceptions import (
    ApprovalNotFoundError,
    InternalStateError,
    UnsupportedRequestError,
    WorkflowError,
)

__all__ = [
    "ApprovalNotFoundError",
    "InternalStateError",
    "UnsupportedRequestError",
    "WorkflowError",
    "resolve_for_pipelines",
    "resolve_pending_approvals",
]
