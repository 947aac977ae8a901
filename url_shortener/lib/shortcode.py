"""Short code generation utilities."""

import base64
import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate short codes from random bits."""

    # URL-safe base64 alphabet, so a code is always a single path segment
    URLSAFE_CHARS = string.ascii_letters + string.digits + "-_"

    def __init__(self, num_bytes: int = 8, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            num_bytes: Default number of random bytes per code (8 = 64 bits)
            rng: Optional random source, mainly for tests
        """
        if num_bytes < 1:
            raise ValueError("num_bytes must be positive")
        self.num_bytes = num_bytes
        self.rng = rng or random.SystemRandom()

    def generate(self, num_bytes: Optional[int] = None) -> str:
        """Generate a random short code.

        The random value is encoded big-endian and rendered in URL-safe
        base64 without padding: 8 bytes give an 11 character code.

        Args:
            num_bytes: Number of random bytes (uses default if not specified)

        Returns:
            Random short code
        """
        num_bytes = num_bytes or self.num_bytes
        value = self.rng.getrandbits(num_bytes * 8)
        raw = value.to_bytes(num_bytes, "big")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (URL-safe base64, non-empty)."""
        return bool(code) and all(c in ShortCodeGenerator.URLSAFE_CHARS for c in code)
