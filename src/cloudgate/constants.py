"""Constants used throughout Cloudgate.

This module contains application constants that do not depend on runtime
configuration or environment variables. For environment-based configuration,
see the config module.
"""

from typing import Final

# =============================================================================
# AWS Defaults
# =============================================================================

DEFAULT_REGIONS: Final[tuple[str, ...]] = (
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "eu-west-1",
    "eu-west-2",
    "eu-central-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-northeast-1",
)
"""Regions offered in the region selection list."""

DEFAULT_SOURCE_ACTION: Final[str] = "Source"
"""Source action name targeted by commit ID revision overrides."""

CODEPIPELINE_SERVICE: Final[str] = "codepipeline"

# =============================================================================
# CodePipeline Vocabulary
# =============================================================================

APPROVAL_CATEGORY: Final[str] = "Approval"
"""Action category of manual approval actions."""

IN_PROGRESS_STATUS: Final[str] = "InProgress"
"""Latest-execution status of an action awaiting a decision."""

APPROVED_STATUS: Final[str] = "Approved"
REJECTED_STATUS: Final[str] = "Rejected"

COMMIT_ID_REVISION_TYPE: Final[str] = "COMMIT_ID"

UNKNOWN_STATUS: Final[str] = "Unknown"
"""Stage status shown when a stage has never executed."""

NOT_AVAILABLE: Final[str] = "N/A"

LAST_UPDATED_FORMAT: Final[str] = "%b %d %H:%M:%S UTC"
"""strftime format of the stage last-updated column (always UTC)."""

# =============================================================================
# Catalog Names
# =============================================================================

PROVIDER_AWS: Final[str] = "AWS"
SERVICE_CODEPIPELINE: Final[str] = "CodePipeline"
CATEGORY_WORKFLOWS: Final[str] = "Workflows"
CATEGORY_OPERATIONS: Final[str] = "Operations"
CATEGORY_INTERNAL: Final[str] = "Internal Operations"

OPERATION_PIPELINE_STATUS: Final[str] = "Pipeline Status"
OPERATION_START_PIPELINE: Final[str] = "Start Pipeline"
OPERATION_PIPELINE_APPROVALS: Final[str] = "Pipeline Approvals"

# =============================================================================
# View Titles
# =============================================================================

TITLE_PROVIDERS: Final[str] = "Select Cloud Provider"
TITLE_PROFILE: Final[str] = "Select AWS Profile"
TITLE_REGION: Final[str] = "Select AWS Region"
TITLE_SERVICE: Final[str] = "Select AWS Service"
TITLE_CATEGORY: Final[str] = "Select Category"
TITLE_OPERATION: Final[str] = "Select Operation"
TITLE_APPROVALS: Final[str] = "Pipeline Approvals"
TITLE_CONFIRMATION: Final[str] = "Execute Action"
TITLE_SUMMARY: Final[str] = "Enter Comment"
TITLE_EXECUTING: Final[str] = "Execute Action"
TITLE_PIPELINE_STATUS: Final[str] = "Select Pipeline"
TITLE_PIPELINE_STAGES: Final[str] = "Pipeline Stages"

# =============================================================================
# Row Labels
# =============================================================================

ROW_MANUAL_ENTRY: Final[str] = "Manual Entry"
ROW_APPROVE: Final[str] = "Approve"
ROW_REJECT: Final[str] = "Reject"
ROW_EXECUTE: Final[str] = "Execute"
ROW_MANUAL_REVISION: Final[str] = "Manual Revision"
ROW_CANCEL: Final[str] = "Cancel"

DESC_APPROVE: Final[str] = "Approve the pipeline stage"
DESC_REJECT: Final[str] = "Reject the pipeline stage"
DESC_CANCEL: Final[str] = "Cancel and return to main menu"
DESC_MANUAL_REVISION: Final[str] = "Enter a specific commit ID"
DESC_START_LATEST: Final[str] = "Start pipeline with latest commit"
DESC_START_REVISION: Final[str] = "Start pipeline with commit {revision}"

# =============================================================================
# Loading Labels
# =============================================================================

MSG_LOADING_APPROVALS: Final[str] = "Loading approvals..."
MSG_LOADING_PIPELINES: Final[str] = "Loading pipelines..."
MSG_EXECUTING_APPROVAL: Final[str] = "Executing approval action..."
MSG_STARTING_PIPELINE: Final[str] = "Starting pipeline..."

# =============================================================================
# Input Placeholders
# =============================================================================

PLACEHOLDER_PROFILE: Final[str] = "Enter AWS profile name..."
PLACEHOLDER_REGION: Final[str] = "Enter AWS region..."
PLACEHOLDER_APPROVAL_COMMENT: Final[str] = "Enter approval comment..."
PLACEHOLDER_REJECTION_COMMENT: Final[str] = "Enter rejection comment..."
PLACEHOLDER_COMMIT_ID: Final[str] = "Enter commit ID..."

# =============================================================================
# User-facing Messages
# =============================================================================

MSG_APPROVED: Final[str] = (
    "Successfully approved pipeline: {pipeline}, stage: {stage}, action: {action}"
)
MSG_REJECTED: Final[str] = (
    "Successfully rejected pipeline: {pipeline}, stage: {stage}, action: {action}"
)
MSG_STARTED: Final[str] = "Successfully started pipeline: {pipeline}"
MSG_ERROR_PREFIX: Final[str] = "Error: "
MSG_EMPTY_COMMENT: Final[str] = "Comment cannot be empty"
MSG_EMPTY_COMMIT: Final[str] = "Commit ID cannot be empty"
MSG_NO_APPROVAL_SELECTED: Final[str] = "No approval selected"
MSG_NO_PIPELINE_SELECTED: Final[str] = "No pipeline selected"
MSG_NO_OPERATION_SELECTED: Final[str] = "No operation selected"
MSG_NO_ACCOUNT_SELECTED: Final[str] = "AWS profile and region must be selected"
MSG_NO_PENDING_APPROVAL: Final[str] = (
    "no pending approval found for pipeline '{pipeline}' stage '{stage}' action '{action}'"
)

HELP_LIST: Final[str] = "↑/k up • ↓/j down • enter select • esc/- back • q quit"
HELP_TEXT: Final[str] = "enter confirm • esc cancel • ctrl+c quit"
HELP_ERROR: Final[str] = "enter/esc dismiss"
HELP_LOADING: Final[str] = "q quit"
