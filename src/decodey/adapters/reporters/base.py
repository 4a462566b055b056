from __future__ import annotations

from abc import ABC, abstractmethod

from decodey.core.config import DecodeyConfig
from decodey.core.models.session import PuzzleSession


class ReporterBase(ABC):
    @property
    @abstractmethod
    def content_type(self) -> str: ...

    @property
    @abstractmethod
    def file_extension(self) -> str: ...

    @abstractmethod
    def generate(self, session: PuzzleSession, config: DecodeyConfig) -> bytes: ...
