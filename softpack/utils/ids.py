"""Time-based record identifiers"""

import time
from threading import Lock

_lock = Lock()
_last_issued = 0


def new_id() -> str:
    """
    Return milliseconds since the epoch as a string.

    Ids issued by one process are strictly increasing, so two records created
    inside the same millisecond still get distinct ids.
    """
    global _last_issued
    with _lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_issued:
            candidate = _last_issued + 1
        _last_issued = candidate
        return str(candidate)
