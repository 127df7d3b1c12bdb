"""
Tests for the Output Node and PGM annotation.

Tests cover:
- Output path extension checks
- Output writability probe
- PGM encoding
- Header comment insertion
- Handler and executor behaviour
- Error handling
"""

import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from ND_Libs.constants import DOWNSAMPLER_ID
from ND_Libs.errors import OutputImageError
from ND_Libs.ImageEditingLib.raster_models import Raster
from ND_Libs.NodesLib.output_node import (
    OutputNodeConfig,
    OutputNodeHandler,
    check_output_writable,
    comment_pgm,
    create_output_node,
    execute_output_node,
    is_pgm_path,
    output_extension,
    save_pgm,
)


class TestOutputExtension(unittest.TestCase):
    """Test output path extension handling."""

    def test_pgm_accepted_any_case(self):
        self.assertTrue(is_pgm_path("out.pgm"))
        self.assertTrue(is_pgm_path("out.PGM"))
        self.assertTrue(is_pgm_path("/tmp/dir/face.Pgm"))

    def test_other_extensions_rejected(self):
        self.assertFalse(is_pgm_path("out.png"))
        self.assertFalse(is_pgm_path("out.pgm.bak"))
        self.assertFalse(is_pgm_path("out"))

    def test_extension_is_text_after_last_dot(self):
        self.assertEqual(output_extension("a.b.PPM"), "ppm")
        self.assertEqual(output_extension("v1.2/out.pgm"), "pgm")

    def test_path_without_dot_is_its_own_extension(self):
        self.assertEqual(output_extension("PGM"), "pgm")
        self.assertTrue(is_pgm_path("pgm"))


class TestCheckOutputWritable(unittest.TestCase):
    """Test the writability probe."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_creates_empty_file(self):
        target = self.temp_path / "probe.pgm"
        check_output_writable(target)

        self.assertTrue(target.exists())
        self.assertEqual(target.stat().st_size, 0)

    def test_missing_directory_raises(self):
        target = self.temp_path / "missing" / "probe.pgm"
        with self.assertRaises(OutputImageError) as ctx:
            check_output_writable(target)

        self.assertIn(str(target), str(ctx.exception))
        self.assertIsInstance(ctx.exception, OSError)


class TestSavePgm(unittest.TestCase):
    """Test PGM encoding."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_writes_binary_pgm(self):
        values = np.arange(15, dtype=np.uint8).reshape(3, 5)
        target = save_pgm(Raster.from_array(values), self.temp_path / "out.pgm")

        content = target.read_bytes()
        self.assertTrue(content.startswith(b"P5\n"))
        self.assertEqual(content[-15:], values.tobytes())

    def test_round_trip_through_pillow(self):
        values = np.array([[0, 128], [255, 64]], dtype=np.uint8)
        target = save_pgm(Raster.from_array(values), self.temp_path / "out.pgm")

        with Image.open(target) as img:
            self.assertEqual(img.mode, "L")
            self.assertEqual(np.asarray(img).tolist(), values.tolist())

    def test_unwritable_path_raises(self):
        with self.assertRaises(OutputImageError):
            save_pgm(Raster.blank(2, 2), self.temp_path / "nope" / "out.pgm")

    def test_empty_raster_rejected_before_writing(self):
        target = self.temp_path / "empty.pgm"

        with self.assertRaises(OutputImageError) as ctx:
            save_pgm(Raster.blank(0, 3), target)

        self.assertIn("empty", str(ctx.exception))
        self.assertFalse(target.exists())


class TestCommentPgm(unittest.TestCase):
    """Test header comment insertion."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.values = np.arange(25, dtype=np.uint8).reshape(5, 5) * 10
        self.pgm = save_pgm(Raster.from_array(self.values), self.temp_path / "face.pgm")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_comment_inserted_after_magic(self):
        before = self.pgm.read_bytes()
        comment_pgm(self.pgm, DOWNSAMPLER_ID)
        after = self.pgm.read_bytes()

        expected = before[:3] + b"#" + DOWNSAMPLER_ID.encode("ascii") + b"\n" + before[3:]
        self.assertEqual(after, expected)

    def test_pixel_data_unchanged(self):
        before = self.pgm.read_bytes()
        comment_pgm(self.pgm, DOWNSAMPLER_ID)
        after = self.pgm.read_bytes()

        self.assertEqual(after[-25:], before[-25:])
        self.assertEqual(after[-25:], self.values.tobytes())
        self.assertEqual(len(after) - len(before), len(DOWNSAMPLER_ID) + 2)

    def test_annotated_file_still_decodes(self):
        comment_pgm(self.pgm, DOWNSAMPLER_ID)

        with Image.open(self.pgm) as img:
            self.assertEqual(img.size, (5, 5))
            self.assertEqual(np.asarray(img).tolist(), self.values.tolist())

    def test_provenance_tag_verbatim(self):
        self.assertEqual(
            DOWNSAMPLER_ID,
            "DsmID: NIST-000000000000100 Resvd: "
            "cf3357659812d6ba14d52225977cfdcf6e863d20e04567744c1bfd1e7c9acb27 ",
        )

    def test_missing_file_raises(self):
        missing = self.temp_path / "missing.pgm"
        with self.assertRaises(OutputImageError) as ctx:
            comment_pgm(missing, "x")

        self.assertIn(str(missing), str(ctx.exception))
        self.assertFalse(missing.exists())

    def test_short_file_rejected_unchanged(self):
        short = self.temp_path / "short.pgm"
        short.write_bytes(b"P5")

        with self.assertRaises(ValueError):
            comment_pgm(short, "x")
        self.assertEqual(short.read_bytes(), b"P5")


class TestOutputNodeHandler(unittest.TestCase):
    """Test OutputNodeConfig and OutputNodeHandler."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.raster = Raster.from_array(np.full((3, 4), 90, dtype=np.uint8))

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_config_defaults(self):
        config = OutputNodeConfig()

        self.assertEqual(config.output_path, "output.pgm")
        self.assertEqual(config.comment, DOWNSAMPLER_ID)

    def test_config_dict_round_trip_ignores_unknown_keys(self):
        data = OutputNodeConfig(output_path="x.pgm", comment="tag").to_dict()
        data["type"] = "Output"
        data["annotate"] = False

        config = OutputNodeConfig.from_dict(data)
        self.assertEqual(config.output_path, "x.pgm")
        self.assertEqual(config.comment, "tag")

    def test_save_raster_annotates(self):
        target = self.temp_path / "out.pgm"
        handler = OutputNodeHandler(OutputNodeConfig(output_path=str(target)))

        saved = handler.save_raster(self.raster)

        self.assertEqual(saved, target)
        self.assertTrue(target.read_bytes().startswith(b"P5\n#" + DOWNSAMPLER_ID.encode("ascii")))

    def test_save_raster_always_stamps_comment(self):
        target = self.temp_path / "plain.pgm"
        node = create_output_node("o", "d", target)
        node["annotate"] = False

        execute_output_node(node, [self.raster])

        self.assertTrue(target.read_bytes().startswith(b"P5\n#DsmID: "))

    def test_missing_parent_directory_not_created(self):
        target = self.temp_path / "a" / "b" / "out.pgm"
        handler = OutputNodeHandler(OutputNodeConfig(output_path=str(target)))

        with self.assertRaises(OutputImageError):
            handler.save_raster(self.raster)
        self.assertFalse(target.parent.exists())

    def test_rejects_non_pgm_path(self):
        handler = OutputNodeHandler(OutputNodeConfig(output_path=str(self.temp_path / "x.png")))

        with self.assertRaises(ValueError):
            handler.save_raster(self.raster)
        self.assertFalse((self.temp_path / "x.png").exists())


class TestExecuteOutputNode(unittest.TestCase):
    """Test the output node executor."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_executor_saves(self):
        target = self.temp_path / "node.pgm"
        node = create_output_node("out-1", "decimate-1", target)

        result = execute_output_node(node, [Raster.from_array([[1, 2], [3, 4]])])

        self.assertEqual(result, target)
        self.assertTrue(target.exists())

    def test_create_output_node_fields(self):
        node = create_output_node("out-1", "decimate-1", "x.pgm")

        self.assertEqual(node["id"], "out-1")
        self.assertEqual(node["type"], "Output")
        self.assertEqual(node["inputs"], ["decimate-1"])
        self.assertEqual(node["output_path"], "x.pgm")
        self.assertEqual(node["comment"], DOWNSAMPLER_ID)

    def test_executor_requires_input(self):
        with self.assertRaises(ValueError):
            execute_output_node(create_output_node("o", "d", "x.pgm"), [])

    def test_executor_rejects_non_raster(self):
        with self.assertRaises(TypeError):
            execute_output_node(create_output_node("o", "d", "x.pgm"), ["not a raster"])


if __name__ == "__main__":
    unittest.main()
