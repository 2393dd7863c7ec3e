import logging
import os
import stat

from model.model_errors import PatchIOError
from model.model_patch import FileTimestamps


def statSource(filepath: str) -> os.stat_result:
    """Metadata of the source file, which has to be a regular file"""
    try:
        st = os.stat(filepath)
    except OSError as e:
        raise PatchIOError("stat() failed for {}: {}".format(
            filepath, e.strerror or e), filepath) from e

    if not stat.S_ISREG(st.st_mode):
        raise PatchIOError("{} is not a regular file".format(filepath), filepath)
    return st


def copyTimestamps(filepath: str, timestamps: FileTimestamps):
    """Set access and modification time of filepath to timestamps.

    Nanosecond precision is handed to the OS, file systems with a
    coarser resolution round down.
    """
    try:
        os.utime(filepath, ns=(timestamps.accessTime, timestamps.modificationTime))
    except OSError as e:
        raise PatchIOError("utimes failed for {}: {}".format(
            filepath, e.strerror or e), filepath) from e

    logging.info("Copied timestamps to {} (atime {} ns, mtime {} ns)".format(
        filepath, timestamps.accessTime, timestamps.modificationTime))
