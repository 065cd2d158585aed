import unittest
import sys
import os
import tempfile
import shutil

# Add the project root to the system path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from eve.state import StateStore, load_or_initialize
from eve.errors import StateError


class FakeStore:
    """In-memory store recording writes."""

    def __init__(self, values=None):
        self.values = dict(values or {})
        self.writes = []

    def exists(self, key):
        return key in self.values

    def read(self, key):
        return self.values[key]

    def write(self, key, value):
        self.writes.append((key, value))
        self.values[key] = value


class TestStateStore(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.store = StateStore.for_project(self.test_dir, '.eve')

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_path_for(self):
        self.assertEqual(self.store.path_for('IMAGE'), os.path.join(self.test_dir, '.eve', 'IMAGE'))

    def test_write_creates_directory(self):
        self.assertFalse(self.store.exists('IMAGE'))
        self.store.write('IMAGE', 'myapp')
        self.assertTrue(os.path.isdir(os.path.join(self.test_dir, '.eve')))
        self.assertTrue(self.store.exists('IMAGE'))

    def test_read_strips_whitespace(self):
        os.makedirs(self.store.root)
        with open(self.store.path_for('IMAGE'), 'w') as f:
            f.write('  myapp\n\n')
        self.assertEqual(self.store.read('IMAGE'), 'myapp')

    def test_round_trip(self):
        self.store.write('BUILDER', 'heroku/buildpacks:20')
        self.assertEqual(self.store.read('BUILDER'), 'heroku/buildpacks:20')

    def test_read_missing_raises(self):
        with self.assertRaises(StateError) as ctx:
            self.store.read('IMAGE')
        self.assertIn('IMAGE', str(ctx.exception))


class TestLoadOrInitialize(unittest.TestCase):

    def test_returns_existing_without_writing(self):
        store = FakeStore({'BUILDER': 'custom'})
        self.assertEqual(load_or_initialize(store, 'BUILDER', 'default'), 'custom')
        self.assertEqual(store.writes, [])

    def test_persists_default(self):
        store = FakeStore()
        self.assertEqual(load_or_initialize(store, 'BUILDER', 'default'), 'default')
        self.assertEqual(store.writes, [('BUILDER', 'default')])

    def test_second_call_reads_persisted_value(self):
        store = FakeStore()
        load_or_initialize(store, 'BUILDER', 'default')
        self.assertEqual(load_or_initialize(store, 'BUILDER', 'other'), 'default')
        self.assertEqual(len(store.writes), 1)

    def test_with_directory_store(self):
        test_dir = tempfile.mkdtemp()
        try:
            store = StateStore(os.path.join(test_dir, 'state'))
            self.assertEqual(load_or_initialize(store, 'BUILDER', 'b:1'), 'b:1')
            with open(store.path_for('BUILDER')) as f:
                self.assertEqual(f.read(), 'b:1\n')
        finally:
            shutil.rmtree(test_dir)


if __name__ == "__main__":
    unittest.main()
