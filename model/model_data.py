from __future__ import annotations

import logging


# All Input:    bytes
# All Output:   bytes
# All Internal: bytearray
class Data():
    def __init__(self, data: bytes):
        self._data: bytearray = bytearray(data)


    def getBytes(self) -> bytes:
        return bytes(self._data)


    def getBytesRange(self, start: int, end: int) -> bytes:
        data = self._data[start:end]
        return bytes(data)


    def getLength(self) -> int:
        return len(self._data)


    def getView(self) -> memoryview:
        """View on the internal buffer, release it (with-block) before patching"""
        return memoryview(self._data)


    def patchData(self, offset: int, replace: bytes) -> int:
        """Overwrites bytes at offset with replace, clipped to the current length.

        Bytes that would land at or beyond the end are dropped, the data
        never grows. An offset outside the data is a no-op.
        Returns the number of bytes written.
        """
        origLen = len(self._data)
        if offset < 0 or offset >= origLen:
            logging.debug("Offset {} outside of data (length {}), nothing patched".format(
                offset, origLen))
            return 0

        count = min(len(replace), origLen - offset)
        # copy through views, slicing replace itself would leave an unwiped copy
        with memoryview(replace) as view:
            with view[:count] as part:
                self._data[offset:offset+count] = part

        if len(self._data) != origLen:
            raise Exception("patchData cant patch, different size: {} {}".format(origLen, len(self._data)))
        return count
