"""Utility modules for Cloudgate.

This package provides common utilities for:
- Log file configuration
- Audit logging of state-changing pipeline operations
"""

from cloudgate.utils.audit_logger import AuditLogger, get_audit_logger
from cloudgate.utils.logging import setup_logging

__all__ = ["AuditLogger", "get_audit_logger", "setup_logging"]
