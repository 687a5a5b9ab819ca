"""Tests for the export sinks."""

from blogscrape.storage.filesystem import FilesystemSink, MemorySink


class TestFilesystemSink:
    """Tests for FilesystemSink."""

    def test_save_creates_directory(self, temp_dir):
        """Test the output directory is created on first save."""
        output_dir = temp_dir / "nested" / "myblog"
        sink = FilesystemSink(output_dir)

        sink.save("myblog_2020.xml", "<blog year=\"2020\">é</blog>")

        filepath = output_dir / "myblog_2020.xml"
        assert filepath.read_text(encoding="utf-8") == "<blog year=\"2020\">é</blog>"
        assert sink.written == [filepath]

    def test_save_ignores_directory_in_filename(self, temp_dir):
        """Test documents cannot be written outside the output directory."""
        sink = FilesystemSink(temp_dir / "out")

        sink.save("../escape.xml", "x")

        assert (temp_dir / "out" / "escape.xml").exists()
        assert not (temp_dir / "escape.xml").exists()

    def test_overwrites_existing(self, temp_dir):
        """Test saving twice overwrites the earlier file."""
        sink = FilesystemSink(temp_dir)
        sink.save("a.xml", "old")
        sink.save("a.xml", "new")
        assert (temp_dir / "a.xml").read_text(encoding="utf-8") == "new"


class TestMemorySink:
    """Tests for MemorySink."""

    def test_keeps_save_order(self):
        """Test documents are kept in save order."""
        sink = MemorySink()
        sink.save("b.xml", "2")
        sink.save("a.xml", "1")
        assert list(sink.documents.items()) == [("b.xml", "2"), ("a.xml", "1")]
