"""Fixed-capacity, NUL-terminated path buffers."""

MAXPGPATH = 1024


def new_buffer(value: str = "", capacity: int = MAXPGPATH) -> bytearray:
    """Return a zero-filled buffer of `capacity` bytes holding `value`."""
    buf = bytearray(capacity)
    bounded_append(buf, value, capacity)
    return buf


def bounded_append(dst: bytearray, src: str | bytes, capacity: int) -> int:
    """
    Append `src` to the NUL-terminated content of `dst`.

    At most `capacity` bytes of `dst` are ever touched, terminator included.
    `src` is truncated when it does not fit, and the result is NUL-terminated
    whenever there is room for the terminator.

    Returns:
        len(existing content) + len(src), regardless of truncation. A value
        >= capacity means the result was truncated.
    """
    if isinstance(src, str):
        src = src.encode("utf-8")
    capacity = min(capacity, len(dst))

    try:
        dlen = dst.index(0, 0, capacity)
    except ValueError:
        # No terminator inside the buffer: nothing can be appended.
        dlen = capacity

    room = capacity - dlen
    if room == 0:
        return dlen + len(src)

    n = min(len(src), room - 1)
    dst[dlen:dlen + n] = src[:n]
    dst[dlen + n] = 0
    return dlen + len(src)


def buffer_text(buf: bytearray) -> str:
    """Content of `buf` up to the first NUL."""
    end = buf.find(0)
    if end < 0:
        end = len(buf)
    return buf[:end].decode("utf-8", errors="replace")
