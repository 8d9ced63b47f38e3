import pytest

from page_table import PageTable


class TestPageTable:
    """Verify the per-process page -> frame mapping."""

    def test_lookup_missing_page(self):
        """A page that was never inserted is not resident."""
        table = PageTable(0)
        assert table.lookup(7) is None
        assert 7 not in table

    def test_insert_then_lookup(self):
        """Inserted pages report their frame."""
        table = PageTable(2)
        table.insert(7, 3)
        assert table.lookup(7) == 3
        assert len(table) == 1

    def test_remove(self):
        """Removing a page makes it non-resident again."""
        table = PageTable(0)
        table.insert(7, 3)
        table.remove(7)
        assert table.lookup(7) is None

    def test_remove_missing_raises(self):
        table = PageTable(0)
        with pytest.raises(KeyError):
            table.remove(1)

    def test_fault_counter(self):
        """Fault count only moves when a fault is recorded."""
        table = PageTable(1)
        table.insert(4, 0)
        assert table.fault_count() == 0
        table.record_fault()
        table.record_fault()
        assert table.fault_count() == 2
