"""Pure analysis package for weatherchart.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
I/O.
"""

from .scales import AXIS_POLICY, AxisAssignment, AxisId, AxisRule, assign_axes
from .series import DatasetError, DatasetErrorReason, build_dataset

__all__ = [
    "AXIS_POLICY",
    "AxisAssignment",
    "AxisId",
    "AxisRule",
    "DatasetError",
    "DatasetErrorReason",
    "assign_axes",
    "build_dataset",
]
