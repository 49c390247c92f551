"""Tests for the step status table."""

from tenant_installer.pipeline import status


def test_status_labels():
    assert "Done" in status._status_label(status.STEP_OK)
    assert "Failed" in status._status_label(status.STEP_FAIL)
    assert status._status_label("unknown") == "unknown"


def test_table_rows_follow_step_order():
    table = status.render_step_table(["a", "b", "c"], {"a": status.STEP_OK, "b": status.STEP_FAIL})
    assert table.row_count == 3
    assert [c.header for c in table.columns] == ["Step", "Status"]
    assert list(table.columns[0].cells) == ["a", "b", "c"]
    assert "Not run" in list(table.columns[1].cells)[2]
