import io
import logging
import os
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

from config import config
from hexedit import main, parseArgs, parseOffset
from model.model_errors import UsageError


class ParseArgsTest(unittest.TestCase):
    def test_parse(self):
        request = parseArgs(["-pos", "16", "-w", "DEADBEEF", "-r", "in.bin", "-o", "out.bin"])
        self.assertEqual(request.offset, 16)
        self.assertEqual(request.hexPayload, bytearray(b"DEADBEEF"))
        self.assertIsInstance(request.hexPayload, bytearray)
        self.assertEqual(request.sourcePath, "in.bin")
        self.assertEqual(request.destPath, "out.bin")


    def test_wrong_count(self):
        with self.assertRaises(UsageError) as cm:
            parseArgs(["-pos", "1", "-w", "FF", "-r", "in.bin"], prog="hexedit")
        self.assertIn("Usage: hexedit", str(cm.exception))

        with self.assertRaises(UsageError):
            parseArgs([])
        with self.assertRaises(UsageError):
            parseArgs(["-pos", "1", "-w", "FF", "-r", "in.bin", "-o", "out.bin", "-x", "1"])


    def test_wrong_order(self):
        with self.assertRaises(UsageError) as cm:
            parseArgs(["-w", "FF", "-pos", "1", "-r", "in.bin", "-o", "out.bin"])
        self.assertEqual(str(cm.exception), "Invalid parameter order.")

        with self.assertRaises(UsageError):
            parseArgs(["-pos", "1", "-w", "FF", "-r", "in.bin", "--o", "out.bin"])
        with self.assertRaises(UsageError):
            parseArgs(["-POS", "1", "-w", "FF", "-r", "in.bin", "-o", "out.bin"])


    def test_offset_lenient(self):
        self.assertEqual(parseOffset("0"), 0)
        self.assertEqual(parseOffset("42"), 42)
        self.assertEqual(parseOffset("-7"), -7)
        self.assertEqual(parseOffset("+7"), 7)
        self.assertEqual(parseOffset("  12"), 12)
        self.assertEqual(parseOffset("12abc"), 12)
        self.assertEqual(parseOffset("0x10"), 0)
        self.assertEqual(parseOffset("abc"), 0)
        self.assertEqual(parseOffset(""), 0)
        self.assertEqual(parseOffset("\t\n12"), 12)
        self.assertEqual(parseOffset("\xa012"), 0)
        self.assertEqual(parseOffset("\x1c12"), 0)


    def test_offset_overlong(self):
        self.assertEqual(parseOffset("9" * 5000), sys.maxsize)
        self.assertEqual(parseOffset("-" + "9" * 5000), -sys.maxsize - 1)
        self.assertEqual(parseOffset("9" * 5000, strict=True), sys.maxsize)
        self.assertEqual(parseOffset("0" * 5000 + "42"), 42)
        self.assertEqual(parseOffset("-" + "0" * 5000), 0)
        self.assertEqual(parseOffset("99999999999999999999"), 99999999999999999999)


    def test_offset_strict(self):
        self.assertEqual(parseOffset("42", strict=True), 42)
        self.assertEqual(parseOffset("-7", strict=True), -7)
        for value in ["abc", "12abc", "", " 1", "0x10"]:
            with self.assertRaises(UsageError):
                parseOffset(value, strict=True)


class MainTest(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.src = os.path.join(self.tmpdir, "src.bin")
        self.dst = os.path.join(self.tmpdir, "dst.bin")
        with open(self.src, "wb") as f:
            f.write(b'\x00\x01\x02\x03')
        os.utime(self.src, ns=(1500000000123456789, 1600000000987654321))


    def tearDown(self):
        for handler in logging.root.handlers:
            handler.close()
        logging.root.handlers = []
        shutil.rmtree(self.tmpdir)


    def run_main(self, argv):
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            ret = main(argv)
        return ret, stdout.getvalue(), stderr.getvalue()


    def args(self, pos="0", hexStr="FF", src=None, dst=None):
        return ["-pos", pos, "-w", hexStr, "-r", src or self.src, "-o", dst or self.dst]


    def test_success(self):
        before = os.stat(self.src)
        ret, stdout, _ = self.run_main(self.args("1", "AABB"))
        self.assertEqual(ret, 0)
        self.assertEqual(stdout, "File \"{}\" modified and saved as \"{}\"\n".format(self.src, self.dst))

        # stat before reading, a read may update atime
        after = os.stat(self.dst)
        with open(self.dst, "rb") as f:
            self.assertEqual(f.read(), b'\x00\xaa\xbb\x03')

        self.assertEqual(after.st_atime_ns, before.st_atime_ns)
        self.assertEqual(after.st_mtime_ns, before.st_mtime_ns)


    def test_noop_patch(self):
        for pos in ["4", "-1", "abc"]:
            ret, _, _ = self.run_main(self.args(pos, "FF"))
            self.assertEqual(ret, 0)
            with open(self.dst, "rb") as f:
                expected = b'\xff\x01\x02\x03' if pos == "abc" else b'\x00\x01\x02\x03'
                self.assertEqual(f.read(), expected)


    def test_overlong_offset(self):
        for pos in ["9" * 5000, "-" + "9" * 5000]:
            ret, _, _ = self.run_main(self.args(pos, "FF"))
            self.assertEqual(ret, 0)
            with open(self.dst, "rb") as f:
                self.assertEqual(f.read(), b'\x00\x01\x02\x03')


    def test_usage_error(self):
        argvs = [
            [],
            self.args()[:6],
            self.args() + ["-x", "y"],
            ["-w", "FF", "-pos", "0", "-r", self.src, "-o", self.dst],
            ["-pos", "0", "-w", "FF", "-read", self.src, "-o", self.dst],
        ]
        for argv in argvs:
            ret, stdout, stderr = self.run_main(argv)
            self.assertEqual(ret, 1)
            self.assertEqual(stdout, "")
            self.assertTrue(stderr)
            self.assertFalse(os.path.exists(self.dst))


    def test_format_error(self):
        for hexStr in ["ABC", "12G4", "A" * 1002]:
            ret, _, stderr = self.run_main(self.args("0", hexStr))
            self.assertEqual(ret, 1)
            self.assertIn("Error:", stderr)
            self.assertFalse(os.path.exists(self.dst))


    def test_io_error(self):
        missing = os.path.join(self.tmpdir, "missing.bin")
        ret, _, stderr = self.run_main(self.args(src=missing))
        self.assertEqual(ret, 1)
        self.assertIn(missing, stderr)
        self.assertFalse(os.path.exists(self.dst))

        ret, _, stderr = self.run_main(self.args("0", "A" * 1002, src=missing))
        self.assertEqual(ret, 1)
        self.assertIn("exceeds maximum", stderr)
        self.assertNotIn(missing, stderr)

        baddst = os.path.join(self.tmpdir, "nodir", "dst.bin")
        ret, _, stderr = self.run_main(self.args(dst=baddst))
        self.assertEqual(ret, 1)
        self.assertIn(baddst, stderr)


    def test_strict_offset(self):
        configPath = os.path.join(self.tmpdir, "config.yaml")
        with open(configPath, "w") as f:
            f.write("strictOffset: true\n")

        with mock.patch.object(config, "configPath", configPath):
            ret, _, stderr = self.run_main(self.args("abc"))
            self.assertEqual(ret, 1)
            self.assertIn("Invalid position", stderr)
            self.assertFalse(os.path.exists(self.dst))

            ret, _, _ = self.run_main(self.args("2"))
            self.assertEqual(ret, 0)


    def test_config_error(self):
        configPath = os.path.join(self.tmpdir, "config.yaml")
        with open(configPath, "w") as f:
            f.write("logLevel: NOTALEVEL\n")

        with mock.patch.object(config, "configPath", configPath):
            ret, _, stderr = self.run_main(self.args())
        self.assertEqual(ret, 1)
        self.assertIn("logLevel", stderr)
        self.assertFalse(os.path.exists(self.dst))


    def test_log_file(self):
        configPath = os.path.join(self.tmpdir, "config.yaml")
        logPath = os.path.join(self.tmpdir, "hexedit.log")
        with open(configPath, "w") as f:
            f.write("logLevel: INFO\nlogFile: {}\n".format(logPath))

        with mock.patch.object(config, "configPath", configPath):
            ret, _, _ = self.run_main(self.args())
        self.assertEqual(ret, 0)

        with open(logPath) as f:
            log = f.read()
        self.assertIn("Patched 1 bytes at offset 0", log)
        self.assertIn("payload:2 chars", log)
