"""Cloudgate - terminal workflow for AWS CodePipeline approvals.

This package provides a keyboard-driven terminal interface for browsing a
catalog of cloud services and acting on AWS CodePipeline manual approvals
and pipeline executions.
"""

__version__ = "0.3.0"
__author__ = "Cloudgate Contributors"
__license__ = "MIT"

__all__ = ["__author__", "__license__", "__version__"]
