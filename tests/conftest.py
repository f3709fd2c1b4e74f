"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from cloudgate.catalog.base import Catalog
from cloudgate.catalog.registry import build_catalog
from cloudgate.models.pipelines import ApprovalAction, PipelineSnapshot, StageStatus
from cloudgate.ui.state import NavigationContext


@pytest.fixture
def sample_profile() -> str:
    """Provide a sample AWS profile name.

    Returns:
        AWS profile name.
    """
    return "prod"


@pytest.fixture
def sample_region() -> str:
    """Provide a sample AWS region for testing.

    Returns:
        AWS region name.
    """
    return "us-east-1"


@pytest.fixture
def sample_approval() -> ApprovalAction:
    """Provide a pending approval awaiting a decision."""
    return ApprovalAction(
        pipeline_name="payments",
        stage_name="Prod",
        action_name="ManualGate",
        token="tok-1",
    )


@pytest.fixture
def sample_approvals(sample_approval: ApprovalAction) -> tuple[ApprovalAction, ...]:
    """Provide two pending approvals from different pipelines."""
    return (
        sample_approval,
        ApprovalAction(
            pipeline_name="billing",
            stage_name="Staging",
            action_name="QAGate",
            token="tok-2",
        ),
    )


@pytest.fixture
def sample_pipelines() -> tuple[PipelineSnapshot, ...]:
    """Provide pipeline snapshots as returned by the status operation."""
    return (
        PipelineSnapshot(
            name="payments",
            stages=(
                StageStatus(name="Source", status="Succeeded", last_updated="Jan 02 10:00:00 UTC"),
                StageStatus(name="Prod", status="InProgress", last_updated="Jan 02 10:05:00 UTC"),
            ),
        ),
        PipelineSnapshot(
            name="billing",
            stages=(StageStatus(name="Source", status="Unknown", last_updated="N/A"),),
        ),
    )


@pytest.fixture
def catalog() -> Catalog:
    """Provide the catalog with audit logging disabled."""
    audit_logger = Mock()
    return build_catalog(audit_logger=audit_logger)


@pytest.fixture
def ctx(catalog: Catalog) -> NavigationContext:
    """Provide a navigation context with a small page size."""
    return NavigationContext(catalog=catalog, page_size=3)


@pytest.fixture
def mock_gateway(
    sample_approvals: tuple[ApprovalAction, ...],
    sample_pipelines: tuple[PipelineSnapshot, ...],
) -> Mock:
    """Provide a gateway whose four entry points are async mocks."""
    gateway = Mock()
    gateway.list_pending_approvals = AsyncMock(return_value=list(sample_approvals))
    gateway.submit_approval_decision = AsyncMock(return_value=None)
    gateway.list_pipeline_statuses = AsyncMock(return_value=list(sample_pipelines))
    gateway.start_pipeline_execution = AsyncMock(return_value="exec-123")
    return gateway


@pytest.fixture
def pipeline_declaration() -> dict[str, Any]:
    """Provide a ``get_pipeline`` response with a source, build and approval stage."""
    return {
        "pipeline": {
            "name": "payments",
            "stages": [
                {
                    "name": "Source",
                    "actions": [
                        {"name": "Source", "actionTypeId": {"category": "Source"}},
                    ],
                },
                {
                    "name": "Prod",
                    "actions": [
                        {"name": "ManualGate", "actionTypeId": {"category": "Approval"}},
                        {"name": "Deploy", "actionTypeId": {"category": "Deploy"}},
                    ],
                },
            ],
        }
    }


@pytest.fixture
def pipeline_state() -> dict[str, Any]:
    """Provide a ``get_pipeline_state`` response with a pending approval."""
    return {
        "pipelineName": "payments",
        "stageStates": [
            {
                "stageName": "Source",
                "latestExecution": {"status": "Succeeded"},
                "actionStates": [
                    {
                        "actionName": "Source",
                        "latestExecution": {
                            "status": "Succeeded",
                            "lastStatusChange": datetime(2024, 1, 2, 10, 0, 0, tzinfo=UTC),
                        },
                    }
                ],
            },
            {
                "stageName": "Prod",
                "latestExecution": {"status": "InProgress"},
                "actionStates": [
                    {
                        "actionName": "ManualGate",
                        "latestExecution": {
                            "status": "InProgress",
                            "token": "tok-1",
                            "lastStatusChange": datetime(2024, 1, 2, 10, 5, 0, tzinfo=UTC),
                        },
                    },
                    {"actionName": "Deploy"},
                ],
            },
        ],
    }
