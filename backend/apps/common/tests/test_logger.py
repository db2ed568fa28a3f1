import unittest
from datetime import datetime, timezone

from apps.common.logger import AppLogger, get_logger


class AppLoggerTests(unittest.TestCase):
    def test_bind_merges_context_without_mutating_parent(self):
        base = get_logger('apps.tests.logger').bind(component='users')
        child = base.bind(view='UserListView')
        with self.assertLogs('apps.tests.logger', level='INFO') as captured:
            base.info('parent')
            child.info('child')
        self.assertTrue(captured.output[0].endswith('parent | component=users'))
        self.assertTrue(
            captured.output[1].endswith('child | component=users view=UserListView')
        )

    def test_context_rendered_into_message(self):
        log = get_logger('apps.tests.logger').bind(component='users')
        with self.assertLogs('apps.tests.logger', level='INFO') as captured:
            log.info('User created', user_id=3, at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        line = captured.output[0]
        self.assertIn('User created', line)
        self.assertIn('component=users', line)
        self.assertIn('user_id=3', line)
        self.assertIn('2024-01-01T00:00:00+00:00', line)

    def test_get_logger_returns_app_logger(self):
        self.assertIsInstance(get_logger('apps.tests.logger'), AppLogger)
