__all__ = ["EmptyKeyError", "InconsistentIndexError"]

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EmptyKeyError(ValueError):
    def __str__(self):
        return "Expected key to have at least one element, but got an empty key"


@dataclass(frozen=True, slots=True)
class InconsistentIndexError(AssertionError):
    problem: str

    def __str__(self):
        return f"Expected element index to agree with stored keys, but {self.problem}"
