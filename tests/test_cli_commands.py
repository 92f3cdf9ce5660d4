"""
CLI Command Extensions for Flask
"""
from unittest import TestCase
from wsgi import app
from console.coordinator import coordinator


class TestFlaskCLI(TestCase):
    """Flask CLI Command Extensions Tests"""

    def setUp(self):
        self.runner = app.test_cli_runner()

    def tearDown(self):
        coordinator.reset(seed=False)

    def test_seed_state(self):
        """It should load the mock users and payments"""
        coordinator.reset(seed=False)
        result = self.runner.invoke(args=["seed-state"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Seeded 2 users and 2 payments", result.output)
        self.assertEqual([u.id for u in coordinator.list_users()], ["1", "2"])

    def test_clear_state(self):
        """It should remove all users and payments"""
        coordinator.reset(seed=True)
        result = self.runner.invoke(args=["clear-state"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(coordinator.list_users(), [])
        self.assertEqual(coordinator.list_payments(), [])

    def test_show_stats(self):
        """It should print the dashboard numbers for a given date"""
        coordinator.reset(seed=True)
        result = self.runner.invoke(args=["show-stats", "--date", "2024-04-01"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Total users:      2", result.output)
        self.assertIn("Active promos:    2", result.output)
        self.assertIn("Pending payments: 1", result.output)
