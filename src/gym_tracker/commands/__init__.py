"""CLI commands for gym-tracker."""

from .attendance import attendance
from .backend import backend
from .init import init
from .migrate import migrate
from .profile import profile
from .serve import serve
from .stats import stats
from .supplements import supplements
from .types import training_types

__all__ = [
    "attendance",
    "backend",
    "init",
    "migrate",
    "profile",
    "serve",
    "stats",
    "supplements",
    "training_types",
]
