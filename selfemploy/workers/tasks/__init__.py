"""
Celery Tasks Module.

Sub-modules:
- deadline_tasks: scheduled deadline reminder checks
"""
from __future__ import annotations

from .deadline_tasks import check_tax_deadlines

__all__ = ["check_tax_deadlines"]
