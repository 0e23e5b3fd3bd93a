"""Lint collaborators."""

from .base import BaseLinter
from .eslint import ESLintLinter, parse_eslint_output

__all__ = ["BaseLinter", "ESLintLinter", "parse_eslint_output"]
