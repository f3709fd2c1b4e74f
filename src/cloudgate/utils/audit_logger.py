"""Audit logging for state-changing pipeline operations.

Approval decisions and pipeline starts are recorded as structured JSON
entries through the standard logging system so that they end up in the
application log file next to the operational records.

Example:
    >>> from cloudgate.utils.audit_logger import get_audit_logger
    >>> audit_logger = get_audit_logger()
    >>> audit_logger.log_approval_decision(
    ...     pipeline_name="payments",
    ...     stage_name="Prod",
    ...     action_name="ManualApproval",
    ...     approved=True,
    ...     summary="release 42 signed off",
    ...     profile="prod",
    ...     region="eu-west-1",
    ...     success=True,
    ... )
"""

import json
import logging
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any, Final

from cloudgate.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Keys whose values must never reach the log
SENSITIVE_KEYS: Final[tuple[str, ...]] = (
    "token",
    "secret",
    "password",
    "credential",
    "access_key",
)


class AuditLogger:
    """Structured audit trail for approvals and pipeline executions.

    Attributes:
        enabled: Whether audit logging is enabled.
        settings: Application settings instance.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the audit logger.

        Args:
            settings: Application settings. If None, uses get_settings().
        """
        self.settings = settings or get_settings()
        self.enabled = self.settings.enable_audit_logging

    def log_approval_decision(
        self,
        pipeline_name: str,
        stage_name: str,
        action_name: str,
        approved: bool,
        summary: str,
        profile: str,
        region: str,
        success: bool,
        error: str | None = None,
    ) -> None:
        """Log an approve or reject decision submitted for a manual approval.

        Args:
            pipeline_name: Pipeline owning the approval action.
            stage_name: Stage containing the approval action.
            action_name: Name of the approval action.
            approved: True for approve, False for reject.
            summary: Reviewer comment sent with the decision.
            profile: AWS profile used for the call.
            region: AWS region used for the call.
            success: Whether the decision was accepted by CodePipeline.
            error: Error message if the call failed. Defaults to None.
        """
        if not self.enabled:
            return

        audit_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "event_type": "approval_decision",
            "target": {
                "pipeline": pipeline_name,
                "stage": stage_name,
                "action": action_name,
            },
            "decision": "approve" if approved else "reject",
            "summary": summary,
            "account": {"profile": profile, "region": region},
            "success": success,
            "error": error,
        }

        self._emit_audit_log("AUDIT_APPROVAL", audit_entry, success)

    def log_pipeline_start(
        self,
        pipeline_name: str,
        revision_id: str,
        profile: str,
        region: str,
        success: bool,
        execution_id: str | None = None,
        error: str | None = None,
    ) -> None:
        """Log a pipeline execution start.

        Args:
            pipeline_name: Pipeline that was started.
            revision_id: Commit ID override, empty for the latest revision.
            profile: AWS profile used for the call.
            region: AWS region used for the call.
            success: Whether the execution was started.
            execution_id: Execution ID returned by CodePipeline. Defaults to None.
            error: Error message if the call failed. Defaults to None.
        """
        if not self.enabled:
            return

        audit_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "event_type": "pipeline_start",
            "pipeline": pipeline_name,
            "revision": revision_id or "latest",
            "account": {"profile": profile, "region": region},
            "success": success,
        }
        if execution_id:
            audit_entry["execution_id"] = execution_id
        if error:
            audit_entry["error"] = error

        self._emit_audit_log("AUDIT_START", audit_entry, success)

    def sanitize(self, values: dict[str, Any]) -> dict[str, Any]:
        """Redact sensitive values, recursing into nested dictionaries.

        Args:
            values: Dictionary potentially containing sensitive data.

        Returns:
            Copy of ``values`` with sensitive entries replaced by ``[REDACTED]``.
        """
        sanitized: dict[str, Any] = {}
        for key, value in values.items():
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = self.sanitize(value)
            else:
                sanitized[key] = value
        return sanitized

    def _emit_audit_log(self, log_prefix: str, audit_entry: dict[str, Any], success: bool) -> None:
        message = json.dumps(self.sanitize(audit_entry))
        if success:
            logger.info(f"{log_prefix}: {message}")
        else:
            logger.warning(f"{log_prefix}_FAILED: {message}")


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Get the cached audit logger built from the application settings.

    Returns:
        Configured AuditLogger instance.
    """
    return AuditLogger()
