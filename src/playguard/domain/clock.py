from abc import ABC, abstractmethod


class Clock(ABC):
    @abstractmethod
    def now_ms(self) -> int:
        """Current instant as epoch milliseconds."""
        raise NotImplementedError
