import hexdump

from config import MAX_HEXDUMP_SIZE


def hexdmp(src: bytes, offset=0) -> str:
    """hexdump of src, addresses relative to offset"""
    if len(src) > MAX_HEXDUMP_SIZE:
        return "Region too large ({} > {} max), do not show".format(len(src), MAX_HEXDUMP_SIZE)

    result = []
    for line in hexdump.dumpgen(src):
        # lines look like "00000010: 41 42 ..."
        addr = int(line[:8], 16) + offset
        result.append("{:08X}{}".format(addr, line[8:]))
    return '\n'.join(result)

