"""Lint collaborator interface."""

from abc import ABC, abstractmethod

from ..metrics.models import LintIssue


class BaseLinter(ABC):
    """Runs an external linter over one source text.

    Implementations must be safe to call from several worker threads.
    """

    name: str = "linter"

    @abstractmethod
    def lint(self, source: str, path: str) -> list[LintIssue]:
        """
        Lint source text as if it lived at path.

        Raises:
            LintCollaboratorError: If the linter could not produce a result
        """
        pass
