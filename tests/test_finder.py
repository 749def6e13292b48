"""Tests for path resolution."""

from py_mockfs.config import Config
from py_mockfs.filesystem import FileSystem
from py_mockfs.finder import Finder


def _windows() -> FileSystem:
    fs = FileSystem(Config.windows())
    fs.mount("C", structure={"Users": {"me": {"notes.txt": "hi"}}})
    fs.mount("D", structure={"data.bin": b"\x01"})
    return fs


class TestFinder:
    """Verify segment-by-segment lookup."""

    def test_first_segment_selects_partition(self) -> None:
        """``D:\\`` resolves to the D partition."""
        fs = _windows()
        assert fs.find("D:\\") is fs.get_child("D")

    def test_descends_directories(self) -> None:
        """Later segments walk down directories."""
        fs = _windows()
        node = fs.find("C:\\Users\\me\\notes.txt")
        assert node is not None
        assert node.read(2) == b"hi"

    def test_case_insensitive(self) -> None:
        """Windows lookups ignore case and slash style."""
        fs = _windows()
        assert fs.find("c:/users/ME/NOTES.TXT") is not None

    def test_missing_segment(self) -> None:
        """A missing segment fails immediately."""
        assert _windows().find("C:\\Users\\you\\notes.txt") is None

    def test_missing_partition(self) -> None:
        """An unknown drive does not resolve."""
        assert _windows().find("Q:\\") is None

    def test_cannot_descend_into_file(self) -> None:
        """Segments after a file never resolve."""
        assert _windows().find("D:\\data.bin\\x") is None

    def test_url_input(self) -> None:
        """URLs resolve like paths."""
        fs = _windows()
        assert fs.find("mfs://C:\\Users") is not None

    def test_relative_segments(self) -> None:
        """``.``/``..`` are applied before the walk."""
        fs = _windows()
        assert fs.find("C:\\Users\\me\\..\\me\\.\\notes.txt") is not None


class TestCustomFinder:
    """Verify the finder can be swapped."""

    def test_set_finder(self) -> None:
        """A replacement finder is used for lookups."""
        fs = FileSystem()
        fs.mount()
        finder = Finder(fs)
        fs.set_finder(finder)
        assert fs.finder is finder
        assert finder.file_system is fs

    def test_posix_root(self) -> None:
        """``/`` resolves to the unnamed partition."""
        fs = FileSystem()
        root = fs.mount()
        assert fs.find("/") is root
        assert fs.find("") is root
