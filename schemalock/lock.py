"""
Advisory lock key derivation and the process-local reentrancy flag.

Independent processes touching the same database must derive the same
lock key, so ``locking_key`` is part of the on-the-wire protocol and must
not change.
"""

import threading
import zlib

# Multiplier applied to the database name checksum (unsigned 32-bit)
ADVISORY_LOCK_ID_SALT = 1486364155

# Seconds the server waits for the advisory lock before giving up
LOCK_TIMEOUT_SECONDS = 5


def locking_key(database_name: str) -> str:
    """
    Derive the advisory lock name for a database.

    CRC-32 (IEEE) of the UTF-8 database name, multiplied by
    ADVISORY_LOCK_ID_SALT with 32-bit wraparound, rendered in base 10.

    Args:
        database_name: Name of the database being migrated

    Returns:
        Lock key string

    Example:
        >>> locking_key("testdb")
        '2584668960'
    """
    checksum = zlib.crc32(database_name.encode('utf-8'))
    return str((checksum * ADVISORY_LOCK_ID_SALT) & 0xFFFFFFFF)


class ReentrancyFlag:
    """
    Boolean cell with an atomic compare-and-swap.

    Tracks whether this process believes it holds the server-side lock.
    The internal mutex only guards the check-and-set itself; callers
    never block on it while a server call is in flight.
    """

    def __init__(self, value: bool = False):
        self._value = value
        self._mutex = threading.Lock()

    def compare_and_swap(self, expected: bool, new: bool) -> bool:
        """Set to ``new`` if currently ``expected``; return whether it swapped."""
        with self._mutex:
            if self._value != expected:
                return False
            self._value = new
            return True

    def store(self, value: bool) -> None:
        with self._mutex:
            self._value = value

    def load(self) -> bool:
        with self._mutex:
            return self._value

    def __bool__(self) -> bool:
        return self.load()

    def __repr__(self) -> str:
        return f"<ReentrancyFlag(held={self.load()})>"
