import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from matedump.config import ProbeSettings, Settings, find_config, load_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertEqual(settings.probes.digest_algorithm, "sha256")
        self.assertEqual(settings.probes.disabled, [])
        self.assertEqual(settings.output.format, "json")
        self.assertIsNone(settings.run.timeout_seconds)

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "matedump.yaml"
            path.write_text(
                "probes:\n"
                "  digest_algorithm: SHA3-256\n"
                "  disabled: [media_duration]\n"
                "output:\n"
                "  format: csv\n"
                "run:\n"
                "  timeout_seconds: 2.5\n",
                encoding="utf-8",
            )
            settings = Settings.load(path)
            self.assertEqual(settings.probes.digest_algorithm, "sha3_256")
            self.assertEqual(settings.probes.disabled, ["media_duration"])
            self.assertEqual(settings.output.format, "csv")
            self.assertEqual(settings.run.timeout_seconds, 2.5)

    def test_empty_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "matedump.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(Settings.load(path), Settings())
            self.assertEqual(load_settings(path), Settings())

    def test_rejects_weak_or_unknown_values(self) -> None:
        with self.assertRaises(ValidationError):
            ProbeSettings(digest_algorithm="md5")
        with self.assertRaises(ValidationError):
            ProbeSettings(disabled=["exif"])
        with self.assertRaises(ValidationError):
            ProbeSettings(chunk_size=0)

    def test_find_config_explicit_missing(self) -> None:
        with self.assertRaises(FileNotFoundError):
            find_config(Path("/nonexistent/matedump.yaml"))


if __name__ == "__main__":
    unittest.main()
