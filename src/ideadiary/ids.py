"""
Identifier generation for Idea Diary.

Ids are opaque strings, unique within one process. No cross-process
guarantee is made.
"""

import random
import time
import uuid


def generate_id() -> str:
    """Generate a unique entity ID (random UUID, timestamp fallback)."""
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        # os.urandom has no randomness source on this platform
        return fallback_id()


def fallback_id() -> str:
    """Nanosecond timestamp plus a random hex suffix."""
    return f"{time.time_ns()}_{random.getrandbits(52):x}"
