"""Tests for the audit logger."""

from iexpense import ExpenseStore
from iexpense.audit import AuditLogger, configure_logging
from iexpense.models import ExpenseItem


class RecordingLogger:
    """Stands in for a structlog logger."""

    def __init__(self):
        self.calls = []

    def info(self, event, **kw):
        self.calls.append(("info", event, kw))

    def warning(self, event, **kw):
        self.calls.append(("warning", event, kw))


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_logs_each_change(self, storage, coffee, rent):
        recorder = RecordingLogger()
        store = ExpenseStore(storage)
        AuditLogger(recorder).attach(store)

        store.add(coffee)
        store.add(rent)
        store.remove({0})

        assert [call[0] for call in recorder.calls] == ["info"] * 3
        level, event, fields = recorder.calls[-1]
        assert event == "expense_list_changed"
        assert fields["change_type"] == "removed"
        assert fields["item_ids"] == [str(coffee.id)]
        assert fields["count"] == 1

    def test_unsaved_change_logged_as_warning(self, failing_storage, coffee):
        recorder = RecordingLogger()
        store = ExpenseStore(failing_storage)
        AuditLogger(recorder).attach(store)

        store.add(coffee)

        [(level, event, fields)] = recorder.calls
        assert level == "warning"
        assert event == "expense_list_changed_unsaved"
        assert fields["persisted"] is False

    def test_detach(self, storage, coffee):
        recorder = RecordingLogger()
        store = ExpenseStore(storage)
        audit = AuditLogger(recorder)
        audit.attach(store)
        audit.detach()
        audit.detach()

        store.add(coffee)
        assert recorder.calls == []

    def test_attach_twice_logs_once(self, storage, coffee):
        recorder = RecordingLogger()
        store = ExpenseStore(storage)
        audit = AuditLogger(recorder)
        audit.attach(store)
        audit.attach(store)

        store.add(coffee)
        assert len(recorder.calls) == 1

    def test_default_logger_does_not_raise(self, storage):
        configure_logging("DEBUG", "console")
        store = ExpenseStore(storage)
        AuditLogger().attach(store)
        store.add(ExpenseItem(name="Tea", type="Personal", amount=2))
        configure_logging("INFO", "json")
