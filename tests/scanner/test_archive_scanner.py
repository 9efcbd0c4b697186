import io
import tempfile
import unittest
import warnings
import zipfile
from pathlib import Path

from resdup.errors import ArchiveReadError
from resdup.path_filter import PathFilter
from resdup.registry import PathRecord, Registry
from resdup.scanner.archive import scan_archive

from ..test_utils import make_archive


class ArchiveScannerTest(unittest.TestCase):
    """Test duplicate scanning of ZIP archives."""

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmpdir.name)
        self.registry = Registry()
        self.output = io.StringIO()

    def tearDown(self):
        self._tmpdir.cleanup()

    def scan(self, archive: Path, path_filter: PathFilter | None = None) -> int:
        return scan_archive(archive, path_filter or PathFilter.suffix(), self.registry, self.output)

    def test_same_size_duplicate(self):
        a = make_archive(self.tmp / 'A.jar', {'x/Y.class': 100})
        b = make_archive(self.tmp / 'B.jar', {'x/Y.class': 100})

        self.assertEqual(0, self.scan(a))
        self.assertEqual(1, self.scan(b))

        self.assertEqual(PathRecord('A.jar', 100), self.registry.lookup('x/Y.class'))
        self.assertEqual(
            f"File {b} contains path x/Y.class which duplicates a path from A.jar with same file size\n",
            self.output.getvalue())

    def test_different_size_duplicate(self):
        a = make_archive(self.tmp / 'A.jar', {'x/Y.class': 100})
        b = make_archive(self.tmp / 'B.jar', {'x/Y.class': 150})

        self.scan(a)
        self.assertEqual(1, self.scan(b))

        self.assertIn('with a different file size (150 != 100)', self.output.getvalue())
        self.assertEqual(PathRecord('A.jar', 100), self.registry.lookup('x/Y.class'))

    def test_filtered_entries_are_ignored(self):
        a = make_archive(self.tmp / 'A.jar', {'META-INF/MANIFEST.MF': 10, 'x/Y.class': 1})
        b = make_archive(self.tmp / 'B.jar', {'META-INF/MANIFEST.MF': 10})

        self.scan(a)
        self.assertEqual(0, self.scan(b))

        self.assertIsNone(self.registry.lookup('META-INF/MANIFEST.MF'))
        self.assertEqual(1, self.registry.count())
        self.assertEqual('', self.output.getvalue())

    def test_directory_entries_pass_through_the_filter(self):
        a = make_archive(self.tmp / 'A.jar', {'META-INF/': b'', 'x/Y.class': 5})
        b = make_archive(self.tmp / 'B.jar', {'META-INF/': b''})

        self.scan(a, PathFilter.pattern('.*'))
        self.assertEqual(1, self.scan(b, PathFilter.pattern('.*')))

        self.assertEqual(PathRecord('A.jar', 0), self.registry.lookup('META-INF/'))
        self.assertIn('contains path META-INF/ which duplicates a path from A.jar with same file size',
                      self.output.getvalue())

    def test_directory_entries_rejected_by_suffix_filter(self):
        archive = make_archive(self.tmp / 'A.zip', {'x/': b'', 'x/Y.class': 5})

        self.scan(archive)

        self.assertEqual({'x/Y.class'}, {path for path, _ in self.registry.entries()})

    def test_repeated_entry_within_one_archive(self):
        archive = self.tmp / 'A.jar'
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')  # zipfile warns about duplicate names
            with zipfile.ZipFile(archive, 'w') as zf:
                zf.writestr('x/Y.class', b'12')
                zf.writestr('x/Y.class', b'123')

        self.assertEqual(1, self.scan(archive))
        self.assertEqual(PathRecord('A.jar', 2), self.registry.lookup('x/Y.class'))

    def test_entry_names_are_used_verbatim(self):
        archive = make_archive(self.tmp / 'A.jar', {'a/b/C.class': 3})

        self.scan(archive)

        self.assertEqual(PathRecord('A.jar', 3), self.registry.lookup('a/b/C.class'))

    def test_missing_archive_raises(self):
        with self.assertRaises(ArchiveReadError):
            self.scan(self.tmp / 'missing.jar')

    def test_invalid_archive_raises(self):
        bogus = self.tmp / 'bogus.jar'
        bogus.write_text('not a zip file')

        with self.assertRaises(ArchiveReadError) as cm:
            self.scan(bogus)

        self.assertIn('bogus.jar', str(cm.exception))
        self.assertIsInstance(cm.exception, OSError)


if __name__ == '__main__':
    unittest.main()
