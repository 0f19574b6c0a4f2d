"""
Interface for OCR recognition engines.

Lifecycle: ``start()`` once, ``recognize()`` many times, ``close()`` once.
Engines are async context managers so the lifecycle is scoped to one extraction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from PIL import Image

# Receives a recognition completion ratio in [0, 1] for the current image.
RecognitionProgressCallback = Callable[[float], None]


class IRecognitionEngine(ABC):
    @abstractmethod
    async def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def recognize(
        self,
        image: Image.Image,
        languages: str,
        on_progress: Optional[RecognitionProgressCallback] = None,
    ) -> str:
        """
        Recognize text on one page image.

        Args:
            image: Page bitmap
            languages: Language pair, most likely script first (e.g. "ara+eng")
            on_progress: Optional sub-page progress hook; engines that cannot
                report progress simply never call it

        Raises:
            OcrFailedError: recognition failed
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError

    async def __aenter__(self) -> "IRecognitionEngine":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
