"""
Best-effort wiping of sensitive buffers.

Only mutable buffers can be wiped. Copies the interpreter made on its own
(the sys.argv string, intermediate str objects) are out of reach
and stay in memory until the allocator reuses them.
"""
import ctypes


def secureZero(buf, length: int = None):
    """Overwrite the first length bytes (default: all) of buf with zeros.

    buf has to be writable (bytearray, writable memoryview). The write
    goes through ctypes.memset into the buffer's memory, which cannot be
    optimized away.
    """
    with memoryview(buf) as view:
        if view.readonly:
            raise TypeError("secureZero needs a writable buffer, got {}".format(type(buf).__name__))
        size = view.nbytes
    if length is None:
        length = size
    if length < 0 or length > size:
        raise ValueError("length {} out of range for buffer of {} bytes".format(length, size))
    if length == 0:
        return

    view = (ctypes.c_char * size).from_buffer(buf)
    try:
        ctypes.memset(ctypes.addressof(view), 0, length)
    finally:
        del view


def wipeAndClear(buf: bytearray):
    """Zero buf and then release its contents"""
    secureZero(buf)
    buf.clear()
