from __future__ import annotations

from typing import Any


class BaseSelector:
    """Interface for strategies that pick a solver class for an instance."""

    def predict(self, features: dict[str, Any]):
        raise NotImplementedError


__all__ = ["BaseSelector"]
