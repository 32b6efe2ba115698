"""Random helpers for realistic device and network data."""

import random
import uuid


def uniform_amount(rng: random.Random, low: float, high: float) -> float:
    return round(rng.uniform(low, high), 2)


def generate_ip_address(rng: random.Random) -> str:
    octets = [rng.randint(0, 255) for _ in range(4)]
    return ".".join(str(o) for o in octets)


def generate_device_id(rng: random.Random) -> str:
    return f"device_{uuid.UUID(int=rng.getrandbits(128), version=4).hex[:12]}"


USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/91.0.4472.124",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) Safari/14.1.1",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 14_6 like Mac OS X) Mobile/15E148",
    "Mozilla/5.0 (Android 11; Mobile; rv:68.0) Gecko/68.0 Firefox/88.0",
)
