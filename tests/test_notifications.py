#!/usr/bin/env python3
"""
Tests for services/notifications.py.

Run with:
    python -m pytest tests/test_notifications.py
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services import notifications
from services.notifications import Notification, NotificationCenter


class TestNotificationCenter(unittest.TestCase):

    def test_subscribers_receive_notifications(self):
        center = NotificationCenter()
        received = []
        center.subscribe(received.append)
        center.notify("Game added successfully!", "success")
        self.assertEqual(received, [Notification("Game added successfully!", "success")])

    def test_unsubscribe(self):
        center = NotificationCenter()
        received = []
        center.subscribe(received.append)
        center.unsubscribe(received.append)
        center.notify("hello")
        self.assertEqual(received, [])

    def test_default_level_is_info(self):
        self.assertEqual(NotificationCenter().notify("hi").level, "info")

    def test_history_is_bounded(self):
        center = NotificationCenter()
        for i in range(notifications.HISTORY_SIZE + 5):
            center.notify(f"n{i}")
        history = center.history
        self.assertEqual(len(history), notifications.HISTORY_SIZE)
        self.assertEqual(history[-1].message, f"n{notifications.HISTORY_SIZE + 4}")


if __name__ == "__main__":
    unittest.main()
