"""Catalog registry - build the static catalog tree.

The tree is built once at start-up and shared read-only by the
navigation state machine and the non-interactive commands.
"""

import logging
from typing import Final

from cloudgate.catalog.base import Catalog, CatalogEntry, Category, Provider, Service
from cloudgate.catalog.codepipeline import (
    PipelineApprovalsOperation,
    PipelineStatusOperation,
    StartPipelineOperation,
)
from cloudgate.constants import (
    CATEGORY_INTERNAL,
    CATEGORY_OPERATIONS,
    CATEGORY_WORKFLOWS,
    SERVICE_CODEPIPELINE,
)
from cloudgate.utils.audit_logger import AuditLogger

logger: Final = logging.getLogger(__name__)


def build_codepipeline_service(audit_logger: AuditLogger | None = None) -> Service:
    """Build the CodePipeline service with its categories.

    Args:
        audit_logger: Audit logger shared by the state-changing operations.
            Defaults to None (resolved lazily by each operation).

    Returns:
        The CodePipeline service entry.
    """
    workflows = Category(
        entry=CatalogEntry(
            id="workflows",
            name=CATEGORY_WORKFLOWS,
            description="CodePipeline Workflows",
        ),
        operations=(
            PipelineStatusOperation(),
            StartPipelineOperation(audit_logger=audit_logger),
            PipelineApprovalsOperation(audit_logger=audit_logger),
        ),
    )
    service_operations = Category(
        entry=CatalogEntry(
            id="operations",
            name=CATEGORY_OPERATIONS,
            description="CodePipeline Operations",
            available=False,
        )
    )
    # Operations used by the non-interactive commands, never listed
    internal = Category(
        entry=CatalogEntry(
            id="internal",
            name=CATEGORY_INTERNAL,
            description="CodePipeline Internal Operations",
        ),
        operations=(
            PipelineApprovalsOperation(audit_logger=audit_logger, visible_to_users=False),
        ),
        visible_to_users=False,
    )
    return Service(
        entry=CatalogEntry(
            id="codepipeline",
            name=SERVICE_CODEPIPELINE,
            description="Continuous Delivery Service",
        ),
        categories=(workflows, service_operations, internal),
    )


def build_catalog(audit_logger: AuditLogger | None = None) -> Catalog:
    """Build the complete catalog.

    Only Amazon Web Services is implemented; the other providers are listed
    as coming soon.

    Args:
        audit_logger: Audit logger passed to the state-changing operations.
            Defaults to None.

    Returns:
        The catalog tree.

    Example:
        >>> catalog = build_catalog()
        >>> [p.entry.label for p in catalog.providers][1]
        'Microsoft Azure (Coming Soon)'
    """
    aws = Provider(
        entry=CatalogEntry(id="aws", name="Amazon Web Services", description="AWS Cloud Services"),
        services=(build_codepipeline_service(audit_logger),),
    )
    azure = Provider(
        entry=CatalogEntry(
            id="azure",
            name="Microsoft Azure",
            description="Azure Cloud Platform",
            available=False,
        )
    )
    gcp = Provider(
        entry=CatalogEntry(
            id="gcp",
            name="Google Cloud Platform",
            description="Google Cloud Services",
            available=False,
        )
    )
    catalog = Catalog(providers=(aws, azure, gcp))
    logger.debug(f"Built catalog with {len(catalog.providers)} providers")
    return catalog
