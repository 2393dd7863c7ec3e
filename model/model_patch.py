from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class PatchRequest:
    offset: int
    hexPayload: bytearray  # mutable so it can be wiped after decoding
    sourcePath: str
    destPath: str

    def __str__(self):
        # never show the payload itself, only its size
        return "offset:{}  payload:{} chars  source:{}  dest:{}".format(
            self.offset, len(self.hexPayload), self.sourcePath, self.destPath)


@dataclass(frozen=True)
class FileTimestamps:
    accessTime: int        # ns
    modificationTime: int  # ns

    @staticmethod
    def fromStat(st: os.stat_result) -> FileTimestamps:
        return FileTimestamps(st.st_atime_ns, st.st_mtime_ns)


class PatchResult():
    def __init__(self, sourcePath: str, destPath: str, fileSize: int, timestamps: FileTimestamps):
        self.sourcePath: str = sourcePath
        self.destPath: str = destPath
        self.fileSize: int = fileSize
        self.timestamps: FileTimestamps = timestamps

        self.bytesWritten: int = 0  # payload bytes that landed in the file
        self.bytesDropped: int = 0  # payload bytes beyond end of file

    def isNoop(self) -> bool:
        return self.bytesWritten == 0

    def __str__(self):
        return "{} -> {}  size:{}  written:{}  dropped:{}".format(
            self.sourcePath, self.destPath, self.fileSize,
            self.bytesWritten, self.bytesDropped)
