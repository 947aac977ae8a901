"""Short link storage."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .common.logging_config import get_logger
from .shortcode import ShortCodeGenerator


class ShortCodeCollisionError(RuntimeError):
    """No unused short code could be generated."""


class ShortLinkStore(ABC):
    """Mapping from short code to target URL.

    Implementations must be safe to use from many request handlers at once.
    """

    @abstractmethod
    def put(self, target: str) -> str:
        """Store ``target`` under a fresh, previously unused code.

        Args:
            target: The absolute URL to store

        Returns:
            The generated short code

        Raises:
            ShortCodeCollisionError: If no unused code could be generated
        """
        pass

    @abstractmethod
    def get(self, code: str) -> Optional[str]:
        """Get the target URL for a short code.

        Args:
            code: The short code to lookup

        Returns:
            The target URL if found, None otherwise
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None


class InMemoryShortLinkStore(ShortLinkStore):
    """Process-local store guarded by a single lock.

    Entries live for the lifetime of the process; there is no eviction.
    """

    def __init__(
        self,
        generator: Optional[ShortCodeGenerator] = None,
        max_collision_retries: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize in-memory store.

        Args:
            generator: Short code generator
            max_collision_retries: Extra attempts with the default code size
                after a collision before widening the code space
            logger: Optional logger
        """
        self.generator = generator or ShortCodeGenerator()
        self.max_collision_retries = max_collision_retries
        self.logger = logger or get_logger("url_shortener.store")
        self._links: Dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, target: str) -> str:
        with self._lock:
            code = self._generate_unused_code()
            self._links[code] = target
        self.logger.debug(f"Stored short code {code}")
        return code

    def get(self, code: str) -> Optional[str]:
        with self._lock:
            return self._links.get(code)

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def _generate_unused_code(self) -> str:
        # caller holds self._lock
        code = self.generator.generate()
        if code not in self._links:
            return code

        for attempt in range(self.max_collision_retries):
            self.logger.warning(f"Short code collision on {code} (attempt {attempt + 1})")
            code = self.generator.generate()
            if code not in self._links:
                return code

        # Last resort: widen the code space
        code = self.generator.generate(num_bytes=self.generator.num_bytes * 2)
        if code not in self._links:
            self.logger.warning(f"Short code space widened after {self.max_collision_retries} retries")
            return code

        raise ShortCodeCollisionError("Unable to generate unique short code after multiple attempts")
