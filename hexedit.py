#!/usr/bin/python3

"""
Overwrites bytes of a binary file at a position with data given as a hex
string and saves the result as a new file. The source file is left
untouched, its access and modification times are copied to the new file.

usage: hexedit.py -pos X -w "HEXDATA" -r SOURCE_FILE -o OUTPUT_FILE
"""

import logging
import os
import re
import sys
from typing import List

from config import config
from model.model_errors import HexeditError, UsageError, ConfigError
from model.model_patch import PatchRequest
from patcher import patchFile
from timestamps import copyTimestamps

FLAGS = ["-pos", "-w", "-r", "-o"]
MAX_OFFSET_DIGITS = 20


def main(argv: List[str] = None) -> int:
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "hexedit"
    if argv is None:
        argv = sys.argv[1:]

    try:
        config.load()
        setupLogging(config.get("logLevel"), config.get("logFile"))
    except (ConfigError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    try:
        request = parseArgs(argv, prog, strictOffset=config.get("strictOffset"))
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return 1
    logging.info("Request: {}".format(request))

    try:
        result = patchFile(request)
        copyTimestamps(result.destPath, result.timestamps)
    except HexeditError as e:
        logging.info("Failed: {}".format(e))
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    logging.info("Result: {}".format(result))
    print("File \"{}\" modified and saved as \"{}\"".format(result.sourcePath, result.destPath))
    return 0


def parseArgs(argv: List[str], prog="hexedit", strictOffset=False) -> PatchRequest:
    """Fixed order flag/value pairs: -pos X -w HEXDATA -r SOURCE -o OUTPUT"""
    if len(argv) != 2 * len(FLAGS):
        raise UsageError("Usage: {} -pos X -w \"HEXDATA\" -r SOURCE_FILE -o OUTPUT_FILE".format(prog))

    for i, flag in enumerate(FLAGS):
        if argv[2 * i] != flag:
            raise UsageError("Invalid parameter order.")

    return PatchRequest(
        offset=parseOffset(argv[1], strictOffset),
        hexPayload=bytearray(os.fsencode(argv[3])),
        sourcePath=argv[5],
        destPath=argv[7],
    )


def parseOffset(value: str, strict=False) -> int:
    """Base 10 offset.

    Lenient (default) parsing works like strtol(): leading whitespace and
    a sign are accepted, trailing garbage is ignored, and a value without
    any leading digits becomes 0. Strict parsing accepts only a complete
    integer and raises UsageError otherwise.
    """
    if strict:
        if not re.fullmatch(r"[+-]?[0-9]+", value):
            raise UsageError("Invalid position: {!r} is not a base 10 integer".format(value))
        return toOffset(value)

    # only the C locale isspace() characters, like strtol()
    m = re.match(r"[ \t\n\v\f\r]*([+-]?[0-9]+)", value)
    if m is None:
        logging.warning("Position {!r} is not a number, using 0".format(value))
        return 0
    if m.end() != len(value):
        logging.warning("Ignoring trailing characters of position {!r}".format(value))
    return toOffset(m.group(1))


def toOffset(number: str) -> int:
    """Signed decimal string to int, overlong digit runs saturate like strtol()"""
    negative = number.startswith("-")
    digits = number.lstrip("+-").lstrip("0")
    if len(digits) > MAX_OFFSET_DIGITS:
        return -sys.maxsize - 1 if negative else sys.maxsize
    value = int(digits or "0")
    return -value if negative else value


def setupLogging(level="WARNING", logFile=None):
    numericLevel = getattr(logging, str(level).upper(), None)
    if not isinstance(numericLevel, int):
        raise ConfigError("Invalid logLevel: {}".format(level))

    for handler in logging.root.handlers:
        handler.close()
    logging.root.handlers = []

    log_format = '[%(levelname)-8s][%(asctime)s] %(funcName)s() :: %(message)s'
    handlers = [
        logging.StreamHandler(),
    ]
    if logFile:
        handlers.append(logging.FileHandler(logFile))
    logging.basicConfig(
        level=numericLevel,
        format=log_format,
        handlers=handlers,
    )


if __name__ == "__main__":
    sys.exit(main())
