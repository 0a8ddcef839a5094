"""JSON API for gym-tracker."""

from .app import create_app

__all__ = ["create_app"]
