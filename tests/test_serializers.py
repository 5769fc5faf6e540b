import json
import unittest

from matedump.models import BaseAttributes, BlobInput, ExtraAttributes, MetadataRecord, NothingToSerialize
from matedump.serializers import EXPORT_NAMES, serialize, to_csv, to_json


def _record() -> MetadataRecord:
    blob = BlobInput(
        name='a"b.png',
        declared_type="image/png",
        size_bytes=1536,
        last_modified=1_700_000_000_000,
    )
    extra = ExtraAttributes(content_digest="ab" * 32, width=640, height=480)
    return MetadataRecord.build(BaseAttributes.from_blob(blob), extra)


class TestCsv(unittest.TestCase):
    def test_minimal_mapping(self) -> None:
        self.assertEqual(
            to_csv({"name": "a.txt", "sizeBytes": 0}),
            'key,value\n"name","a.txt"\n"sizeBytes","0"',
        )

    def test_quotes_are_doubled(self) -> None:
        lines = to_csv(_record()).split("\n")
        self.assertEqual(lines[0], "key,value")
        self.assertEqual(lines[1], '"name","a""b.png"')
        self.assertEqual(lines[4], '"sizeBytes","1536"')
        self.assertEqual(lines[-1], '"height","480"')
        self.assertFalse(to_csv(_record()).endswith("\n"))

    def test_missing_timestamp_renders_blank(self) -> None:
        record = MetadataRecord.build(
            BaseAttributes.from_blob(BlobInput(name="x")), ExtraAttributes()
        )
        self.assertIn('"lastModified",""', to_csv(record))


class TestJson(unittest.TestCase):
    def test_exact_layout(self) -> None:
        self.assertEqual(
            to_json({"name": "a.txt", "sizeBytes": 0}),
            '{\n  "name": "a.txt",\n  "sizeBytes": 0\n}',
        )

    def test_field_order(self) -> None:
        keys = list(json.loads(to_json(_record())))
        self.assertEqual(
            keys,
            [
                "name",
                "type",
                "sizeHuman",
                "sizeBytes",
                "lastModified",
                "lastModifiedReadable",
                "contentDigest",
                "width",
                "height",
            ],
        )

    def test_round_trip_is_stable(self) -> None:
        text = to_json(_record())
        self.assertEqual(to_json(json.loads(text)), text)

    def test_missing_timestamp_is_null(self) -> None:
        record = MetadataRecord.build(
            BaseAttributes.from_blob(BlobInput(name="x")), ExtraAttributes()
        )
        text = to_json(record)
        self.assertIn('"lastModified": null', text)
        data = json.loads(text)
        self.assertIsNone(data["lastModified"])
        self.assertEqual(data["lastModifiedReadable"], "")

    def test_non_ascii_names_are_kept(self) -> None:
        self.assertIn("Tamaño.txt", to_json({"name": "Tamaño.txt"}))


class TestSerializeGuards(unittest.TestCase):
    def test_nothing_to_serialize(self) -> None:
        for serializer in (to_json, to_csv):
            with self.subTest(serializer=serializer.__name__):
                with self.assertRaises(NothingToSerialize):
                    serializer(None)

    def test_dispatch(self) -> None:
        self.assertTrue(serialize(_record(), "csv").startswith("key,value"))
        self.assertEqual(set(EXPORT_NAMES), {"json", "csv"})
        with self.assertRaises(ValueError):
            serialize(_record(), "xml")


if __name__ == "__main__":
    unittest.main()
