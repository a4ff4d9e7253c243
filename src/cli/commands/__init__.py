"""CLI command modules."""

from .serve import serve
from .skills import order, skills
from .status import status
from .trends import trend
from .validate import validate

__all__ = [
    "validate",
    "skills",
    "order",
    "trend",
    "status",
    "serve",
]
