from abc import ABC, abstractmethod

from ..validation import GenerateResult


class Reporter(ABC):
    @abstractmethod
    def report(self, result: GenerateResult) -> None:
        pass
