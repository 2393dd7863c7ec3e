from typing import Union

from config import MAX_HEX_LENGTH
from model.model_errors import FormatError
from securewipe import secureZero


def hexVal(c: int) -> int:
    """Value of a single hex digit given as its character code"""
    if 0x30 <= c <= 0x39:    # 0-9
        return c - 0x30
    if 0x41 <= c <= 0x46:    # A-F
        return c - 0x41 + 10
    if 0x61 <= c <= 0x66:    # a-f
        return c - 0x61 + 10
    return -1


def checkHexLength(hexStr):
    if len(hexStr) > MAX_HEX_LENGTH:
        raise FormatError("HEX data length exceeds maximum allowed ({} characters).".format(
            MAX_HEX_LENGTH))


def parseHexString(hexStr: Union[str, bytes, bytearray]) -> bytearray:
    """Converts a hex string into a bytearray.

    Example: "0102030A" -> bytearray(b'\\x01\\x02\\x03\\x0a')

    Raises FormatError if the string is longer than MAX_HEX_LENGTH,
    has an odd length, or contains a non hex character. The result is
    built in place, so that the caller can wipe it after use.
    """
    if isinstance(hexStr, str):
        hexStr = hexStr.encode("utf-8", "surrogateescape")

    checkHexLength(hexStr)
    if len(hexStr) % 2 != 0:
        raise FormatError("Hex string length is odd.")

    result = bytearray(len(hexStr) // 2)
    for i in range(0, len(hexStr), 2):
        hi = hexVal(hexStr[i])
        lo = hexVal(hexStr[i+1])
        if hi < 0 or lo < 0:
            pos = i if hi < 0 else i + 1
            secureZero(result)
            raise FormatError("Invalid hex character: {!r} at position {}".format(
                chr(hexStr[pos]), pos))
        result[i // 2] = (hi << 4) | lo
    return result
