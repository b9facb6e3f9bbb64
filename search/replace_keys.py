import itertools
import re
import threading

# Private-use code points are not CQL syntax and the doctor strips them from
# incoming phrases, so a key can't collide with user text or with another key.
KEY_OPEN = "\ue000"
KEY_CLOSE = "\ue001"
KEY_PATTERN = re.compile(f"{KEY_OPEN}\\d+{KEY_CLOSE}")

FIRST_KEY = 10


class ReplaceKeyCounter:
    """
    Hands out placeholder keys for protected query fragments.
    Keys are unique for the lifetime of the counter, also across threads.
    """

    def __init__(self, start: int = FIRST_KEY):
        self._numbers = itertools.count(start)
        self._lock = threading.Lock()

    def next_key(self) -> str:
        with self._lock:
            number = next(self._numbers)
        return f"{KEY_OPEN}{number}{KEY_CLOSE}"


# Shared by every doctor that isn't handed its own counter
default_key_counter = ReplaceKeyCounter()


def contains_key(text: str) -> bool:
    return KEY_PATTERN.search(text) is not None
