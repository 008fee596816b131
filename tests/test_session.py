"""Tests for the interactive session state machine."""

import pytest

from dusty.models import CleanupMode, CleanupOutcome, ScanResult
from dusty.session import CleanupSession, ViewState, describe_outcome


@pytest.fixture
def session(roots):
    s = CleanupSession()
    s.finish_scan(ScanResult(entries=roots, total_size=sum(r.size for r in roots)))
    return s


class TestScanning:
    def test_starts_scanning(self):
        s = CleanupSession()
        assert s.state == ViewState.SCANNING
        assert s.busy

    def test_finish_scan_populates_rows(self, session, roots):
        assert session.state == ViewState.LIST
        assert len(session.rows) == 3
        assert session.total_size == 1750
        assert session.cursor == 0

    def test_fail_scan_sets_error(self):
        s = CleanupSession()
        s.fail_scan("cannot resolve home directory")
        assert s.state == ViewState.LIST
        assert s.error == "cannot resolve home directory"
        assert s.rows == []

    def test_rescan_resets_cursor_and_message(self, session):
        session.move_down()
        session.message = "Cleaned 1.0 KB!"

        assert session.begin_scan()

        assert session.state == ViewState.SCANNING
        assert session.cursor == 0
        assert session.message == ""

    def test_no_rescan_while_scanning(self):
        s = CleanupSession()
        assert not s.begin_scan()

    def test_scan_result_ignored_outside_scanning(self, session, roots):
        session.finish_scan(ScanResult())
        assert session.roots is not None
        assert len(session.rows) == 3

    def test_input_ignored_while_scanning(self, session):
        session.begin_scan()
        session.toggle_select()
        session.select_all()
        session.move_down()
        assert session.selected_size == 0
        assert session.cursor == 0


class TestNavigation:
    def test_move_within_bounds(self, session):
        session.move_up()
        assert session.cursor == 0
        session.move_down()
        session.move_down()
        session.move_down()
        assert session.cursor == 2

    def test_current_row(self, session, roots):
        session.move_down()
        assert session.current_row.entry is roots[1]

    def test_current_row_empty(self):
        s = CleanupSession()
        assert s.current_row is None


class TestExpandAndSelect:
    def test_expand_rebuilds_rows(self, session, roots):
        session.toggle_expand()
        assert roots[0].expanded
        assert len(session.rows) == 6
        session.toggle_expand()
        assert len(session.rows) == 3

    def test_expand_ignored_on_child_row(self, session, roots):
        session.toggle_expand()
        session.move_down()
        session.toggle_expand()
        assert roots[0].expanded
        assert len(session.rows) == 6

    def test_expand_ignored_on_leaf(self, session, roots):
        session.move_down()
        session.move_down()
        session.toggle_expand()
        assert not roots[2].expanded

    def test_toggle_select_at_cursor(self, session, roots):
        session.toggle_select()
        assert roots[0].selected
        assert session.selected_size == 1100

    def test_select_child_row(self, session, roots):
        session.toggle_expand()
        session.move_down()
        session.move_down()
        session.toggle_select()
        assert roots[0].children[1].selected
        assert not roots[0].selected
        assert session.selected_size == 300

    def test_selection_keeps_rows(self, session):
        before = session.rows
        session.toggle_select()
        assert session.rows is before

    def test_select_and_deselect_all(self, session):
        session.select_all()
        assert session.selected_size == 1750
        session.deselect_all()
        assert session.selected_size == 0


class TestFilter:
    def test_commit_filter(self, session, roots):
        session.move_down()
        session.start_filter()
        assert session.state == ViewState.FILTER

        session.commit_filter("registry")

        assert session.state == ViewState.LIST
        assert session.filter_text == "registry"
        assert session.cursor == 0
        assert [r.entry for r in session.rows] == [roots[2]]

    def test_cancel_filter_keeps_previous(self, session):
        session.start_filter()
        session.commit_filter("logs")
        session.start_filter()
        session.cancel_filter()
        assert session.filter_text == "logs"
        assert session.state == ViewState.LIST

    def test_clear_filter(self, session):
        session.start_filter()
        session.commit_filter("logs")
        assert len(session.rows) == 1

        session.clear_filter()

        assert session.filter_text == ""
        assert len(session.rows) == 3

    def test_navigation_ignored_while_filtering(self, session):
        session.start_filter()
        session.move_down()
        session.toggle_select()
        assert session.cursor == 0
        assert session.selected_size == 0

    def test_cursor_clamped_when_rows_shrink(self, session, roots):
        session.toggle_expand()
        for _ in range(5):
            session.move_down()
        assert session.cursor == 5

        session.tree.toggle_expand(roots[0])
        session.rebuild_rows()

        assert len(session.rows) == 3
        assert session.cursor == 2


class TestCleanupFlow:
    def test_request_needs_selection(self, session):
        assert not session.request_cleanup(CleanupMode.PERMANENT)
        assert session.state == ViewState.LIST

    def test_request_confirm_and_finish(self, session):
        session.toggle_select()
        assert session.request_cleanup(CleanupMode.TRASH)
        assert session.state == ViewState.CONFIRM

        assert session.confirm() == CleanupMode.TRASH
        assert session.state == ViewState.CLEANING
        assert session.busy

        session.finish_cleanup(CleanupOutcome(mode=CleanupMode.TRASH, bytes_planned=1100))

        assert session.state == ViewState.SCANNING
        assert session.message == "Moved to Trash 1.1 KB!"
        assert not session.message_is_error

    def test_cancel_confirm(self, session):
        session.toggle_select()
        session.request_cleanup(CleanupMode.PERMANENT)
        session.cancel_confirm()
        assert session.state == ViewState.LIST
        assert session.pending_mode is None
        assert session.confirm() is None

    def test_failed_cleanup_keeps_error_through_rescan(self, session, roots):
        session.toggle_select()
        session.request_cleanup(CleanupMode.PERMANENT)
        session.confirm()

        session.finish_cleanup(
            CleanupOutcome(
                mode=CleanupMode.PERMANENT,
                bytes_planned=1100,
                removed=["/cache/Caches/Caches-0"],
                failed_path="/cache/Caches/Caches-1",
                error="failed to clean /cache/Caches/Caches-1: denied",
            )
        )
        session.finish_scan(ScanResult(entries=roots))

        assert session.message_is_error
        assert "Caches-1" in session.message
        assert "1 items were already removed" in session.message

    def test_selected_targets(self, session, roots):
        session.toggle_select()
        assert session.selected_targets() == [roots[0]]


class TestHelp:
    def test_show_and_dismiss(self, session):
        session.show_help()
        assert session.state == ViewState.HELP
        session.toggle_select()
        assert session.selected_size == 0
        session.dismiss_help()
        assert session.state == ViewState.LIST


class TestDescribeOutcome:
    def test_clean(self):
        text = describe_outcome(CleanupOutcome(mode=CleanupMode.PERMANENT, bytes_planned=2048))
        assert text == "Cleaned 2.0 KB!"

    def test_dry_run(self):
        text = describe_outcome(
            CleanupOutcome(mode=CleanupMode.PERMANENT, bytes_planned=2048, dry_run=True)
        )
        assert text.startswith("Dry run")

    def test_error(self):
        text = describe_outcome(
            CleanupOutcome(mode=CleanupMode.TRASH, error="failed to clean /x: nope")
        )
        assert text == "Error: failed to clean /x: nope"
