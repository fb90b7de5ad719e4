"""Evaluation context passed to expression nodes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import EngineSettings


@dataclass(frozen=True)
class EvaluationContext:
    """Variables visible to a single render plus the strictness flag.

    One context belongs to one render; compiled expression nodes are shared
    across renders and never store a context.
    """

    variables: Mapping[str, Any] = field(default_factory=dict)
    strict_variables: bool = False

    @classmethod
    def from_settings(
        cls, variables: Mapping[str, Any], settings: EngineSettings
    ) -> EvaluationContext:
        """Create a context using the strictness configured in settings."""
        return cls(variables=variables, strict_variables=settings.strict_variables)

    def is_strict_variables(self) -> bool:
        return self.strict_variables

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def get_variable(self, name: str) -> Any:
        return self.variables.get(name)


__all__ = ["EvaluationContext"]
