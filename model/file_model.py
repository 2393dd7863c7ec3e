import os

from model.model_data import Data
from model.model_errors import PatchIOError


class PatchFile():
    """A file held completely in memory while it gets patched"""
    def __init__(self):
        self.filepath: str = None
        self.filename: str = None
        self.fileData: Data = Data(b'')  # The content of the file


    def Data(self) -> Data:
        return self.fileData


    def loadFromFile(self, filepath: str, size: int):
        """Read exactly size bytes (as reported by stat) from filepath"""
        self.filepath = filepath
        self.filename = os.path.basename(filepath)

        try:
            with open(self.filepath, "rb") as f:
                data = f.read(size)
        except OSError as e:
            raise PatchIOError("could not open file {}: {}".format(
                filepath, e.strerror or e), filepath) from e

        if len(data) != size:
            raise PatchIOError("reading file {} failed, got {} of {} bytes".format(
                filepath, len(data), size), filepath)
        self.fileData = Data(data)


    def saveToFile(self, filepath: str):
        """Write the whole buffer to filepath, creating or truncating it"""
        try:
            f = open(filepath, "wb")
        except OSError as e:
            raise PatchIOError("could not create file {}: {}".format(
                filepath, e.strerror or e), filepath) from e

        # written straight from the buffer, no bytes copy of the patched data
        with f, self.fileData.getView() as view:
            try:
                written = f.write(view)
                f.flush()
            except OSError as e:
                raise PatchIOError("writing to file {} failed: {}".format(
                    filepath, e.strerror or e), filepath) from e

            if written != view.nbytes:
                raise PatchIOError("writing to file {} failed, wrote {} of {} bytes".format(
                    filepath, written, view.nbytes), filepath)
