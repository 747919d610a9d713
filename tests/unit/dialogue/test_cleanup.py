"""Tests for the cleanup tracker."""

from helpdesk.dialogue.cleanup import CleanupTracker


class TestCleanupTracker:
    def test_keeps_insertion_order(self):
        tracker = CleanupTracker()
        for message_id in (5, 3, 9):
            tracker.add(message_id)

        assert tracker.message_ids == [5, 3, 9]

    def test_ignores_duplicates(self):
        tracker = CleanupTracker()

        assert tracker.add(1)
        assert tracker.add(1)

        assert tracker.message_ids == [1]
        assert len(tracker) == 1
        assert 1 in tracker

    def test_seal_returns_everything_and_refuses_more(self):
        tracker = CleanupTracker()
        tracker.add(1)
        tracker.add(2)

        sealed = tracker.seal()

        assert sealed == [1, 2]
        assert tracker.sealed
        assert tracker.add(3) is False
        assert tracker.message_ids == [1, 2]

    def test_sealed_list_is_a_copy(self):
        tracker = CleanupTracker()
        tracker.add(1)

        sealed = tracker.seal()
        sealed.append(99)

        assert tracker.message_ids == [1]
