from abc import ABC, abstractmethod

from core.config import Settings


class App(ABC):
    """Runnable front-end; its exit status is what run() returns."""

    settings: Settings

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def execute(self) -> int:
        try:
            return self.run()
        finally:
            self.close()

    @abstractmethod
    def run(self) -> int:
        raise NotImplementedError

    def close(self) -> None:
        pass
