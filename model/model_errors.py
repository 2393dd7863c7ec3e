class HexeditError(Exception):
    """Base for all errors that end a run with exit code 1"""
    pass


class UsageError(HexeditError):
    pass


class FormatError(HexeditError, ValueError):
    pass


class ConfigError(HexeditError):
    pass


class PatchIOError(HexeditError, OSError):
    """File system failure, message names the offending path"""
    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path: str = path
