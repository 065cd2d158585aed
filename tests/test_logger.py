import unittest
import sys
import os
import io

# Add the project root to the system path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from eve.logger import Logger, Level, level_from_env, colorize, get_logger, set_logger


class TestLevelFromEnv(unittest.TestCase):

    def test_unset_is_warn(self):
        self.assertEqual(level_from_env({}), Level.WARN)

    def test_known_levels(self):
        self.assertEqual(level_from_env({'LOG_LEVEL': 'debug'}), Level.DEBUG)
        self.assertEqual(level_from_env({'LOG_LEVEL': 'WARN'}), Level.WARN)
        self.assertEqual(level_from_env({'LOG_LEVEL': 'Error'}), Level.ERROR)

    def test_other_values_are_info(self):
        self.assertEqual(level_from_env({'LOG_LEVEL': 'info'}), Level.INFO)
        self.assertEqual(level_from_env({'LOG_LEVEL': 'verbose'}), Level.INFO)
        self.assertEqual(level_from_env({'LOG_LEVEL': ''}), Level.INFO)


class TestLogger(unittest.TestCase):

    def make(self, level, color=False):
        out = io.StringIO()
        return Logger(out=out, level=level, color=color), out

    def test_threshold(self):
        log, out = self.make(Level.WARN)
        log.debug('d')
        log.info('i')
        log.warn('w')
        log.error('e')
        self.assertEqual(out.getvalue(), 'WARN w\nERROR e\n')

    def test_formatted_variants(self):
        log, out = self.make(Level.DEBUG)
        log.infof('found %s v%d', 'pack', 1)
        log.warnf('100%')
        log.errorf('error: %s', 'bad')
        self.assertEqual(out.getvalue(), 'INFO found pack v1\nWARN 100%\nERROR error: bad\n')

    def test_args_joined_with_spaces(self):
        log, out = self.make(Level.INFO)
        log.info('a', 1, None)
        self.assertEqual(out.getvalue(), 'INFO a 1 None\n')

    def test_debug_pretty_prints_json(self):
        log, out = self.make(Level.DEBUG)
        log.debug('{"a": [1, 2]}')
        self.assertEqual(out.getvalue(), '{\n  "a": [\n    1,\n    2\n  ]\n}\n')

    def test_debug_pretty_prints_json_scalars(self):
        log, out = self.make(Level.DEBUG)
        log.debug('42')
        log.debug('"text"')
        self.assertEqual(out.getvalue(), '42\n"text"\n')

    def test_debug_plain_for_non_json(self):
        log, out = self.make(Level.DEBUG)
        log.debugf('running: %s', 'pack build app')
        log.debug('NaN')
        self.assertEqual(out.getvalue(), 'DEBUG running: pack build app\nDEBUG NaN\n')

    def test_color_labels(self):
        log, out = self.make(Level.DEBUG, color=True)
        log.warn('careful')
        log.error('bad')
        self.assertEqual(out.getvalue(), f"{colorize('WARN', '33')} careful\n{colorize('ERROR', '31')} bad\n")

    def test_color_off_for_non_tty(self):
        log = Logger(out=io.StringIO())
        self.assertFalse(log.color)

    def test_from_env(self):
        log = Logger.from_env(out=io.StringIO(), environ={'LOG_LEVEL': 'error'})
        self.assertEqual(log.level, Level.ERROR)


class TestDefaultLogger(unittest.TestCase):

    def test_set_and_get(self):
        replacement = Logger(out=io.StringIO())
        previous = set_logger(replacement)
        try:
            self.assertIs(get_logger(), replacement)
        finally:
            set_logger(previous)


if __name__ == "__main__":
    unittest.main()
