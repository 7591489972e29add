"""
Build workflows package.
"""

from .stamp_build_wf import stamp_build_workflow

__all__ = ["stamp_build_workflow"]
