import logging

from config import config
from hexparser import checkHexLength, parseHexString
from model.file_model import PatchFile
from model.model_patch import PatchRequest, PatchResult, FileTimestamps
from securewipe import wipeAndClear
from timestamps import statSource
from utils import hexdmp


def patchFile(request: PatchRequest) -> PatchResult:
    """Read the source, patch it in memory and write the destination.

    request.hexPayload is wiped and emptied in every case, the decoded
    bytes are wiped before returning. Timestamps are captured but not
    applied, see timestamps.copyTimestamps().
    """
    try:
        # rejected before the source is touched
        checkHexLength(request.hexPayload)

        # ReadSource
        st = statSource(request.sourcePath)
        fileSize = st.st_size
        timestamps = FileTimestamps.fromStat(st)
        logging.info("Source {}: {} bytes".format(request.sourcePath, fileSize))

        file = PatchFile()
        file.loadFromFile(request.sourcePath, fileSize)

        # DecodePayload
        patchBytes = parseHexString(request.hexPayload)
    finally:
        wipeAndClear(request.hexPayload)

    result = PatchResult(request.sourcePath, request.destPath, fileSize, timestamps)
    try:
        # ApplyPatch
        result.bytesWritten = applyPatch(file, request.offset, patchBytes)
        result.bytesDropped = len(patchBytes) - result.bytesWritten
    finally:
        wipeAndClear(patchBytes)

    # WriteDestination
    file.saveToFile(request.destPath)
    logging.info("Wrote {} bytes to {}".format(fileSize, request.destPath))
    return result


def applyPatch(file: PatchFile, offset: int, patchBytes: bytearray) -> int:
    """Overwrite file data at offset, returns the number of bytes applied"""
    data = file.Data()
    fileSize = data.getLength()

    if offset < 0 or offset >= fileSize:
        logging.warning("Offset {} is outside of {} ({} bytes), file is copied unmodified".format(
            offset, file.filename, fileSize))
        return 0

    showDump = config.get("hexdump") and logging.getLogger().isEnabledFor(logging.DEBUG)
    if showDump:
        logging.debug("Before:\n" + hexdmp(data.getBytesRange(offset, offset+len(patchBytes)), offset))

    written = data.patchData(offset, patchBytes)
    if written < len(patchBytes):
        logging.warning("Patch of {} bytes at offset {} exceeds file size {}, dropped last {} bytes".format(
            len(patchBytes), offset, fileSize, len(patchBytes) - written))

    if showDump:
        logging.debug("After:\n" + hexdmp(data.getBytesRange(offset, offset+written), offset))

    logging.info("Patched {} bytes at offset {} (0x{:X})".format(written, offset, offset))
    return written
