DEFAULT_LIMIT = 512


class LimitBuffer:
    """Write-through side buffer keeping only the first *limit* bytes.

    Used to mirror a prefix of the response body (typically an error
    payload) so it can be attached to the log record.  Writes never fail
    and always report the full length as consumed; bytes past the
    ceiling are dropped silently.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        self._limit = limit
        self._buf = bytearray()

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._buf)

    def write(self, data: bytes) -> int:
        remaining = self._limit - len(self._buf)
        if remaining > 0:
            self._buf.extend(data[:remaining])
        return len(data)

    def read(self) -> bytes:
        """Drain and return everything captured so far."""
        data = bytes(self._buf)
        self._buf.clear()
        return data
