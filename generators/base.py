"""Base generator class with a seeded RNG."""

import random
import uuid
from typing import Any


class BaseGenerator:
    def __init__(self, config: dict[str, Any], seed: int = 42):
        self.config = config
        self.seed = seed
        self.rng = random.Random(seed)

    def _short_id(self, length: int = 9) -> str:
        """Deterministic hex identifier drawn from the seeded RNG."""
        return uuid.UUID(int=self.rng.getrandbits(128), version=4).hex[:length]
