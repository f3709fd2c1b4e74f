"""Service catalog for Cloudgate.

This package defines the Provider -> Service -> Category -> Operation tree
and the CodePipeline operations registered in it.
"""

from cloudgate.catalog.base import (
    BaseOperation,
    Catalog,
    CatalogEntry,
    Category,
    OperationKind,
    Provider,
    Service,
)
from cloudgate.catalog.codepipeline import (
    PipelineApprovalsOperation,
    PipelineStatusOperation,
    StartPipelineOperation,
)
from cloudgate.catalog.registry import build_catalog, build_codepipeline_service

__all__ = [
    "BaseOperation",
    "Catalog",
    "CatalogEntry",
    "Category",
    "OperationKind",
    "PipelineApprovalsOperation",
    "PipelineStatusOperation",
    "Provider",
    "Service",
    "StartPipelineOperation",
    "build_catalog",
    "build_codepipeline_service",
]
