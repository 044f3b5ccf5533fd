"""
Tests for the in-memory storage backend
"""

import pytest

from atm_banking.storage import InMemoryStorage


class TestInMemoryStorage:
    """Test basic storage operations and atomic blocks"""

    def setup_method(self):
        self.storage = InMemoryStorage()

    def test_basic_operations(self):
        """Test save, load, exists, count and clear"""
        self.storage.save("customers", "CUST001", {"id": "CUST001", "balance": "100.00"})

        assert self.storage.load("customers", "CUST001") == {"id": "CUST001", "balance": "100.00"}
        assert self.storage.exists("customers", "CUST001")
        assert not self.storage.exists("customers", "CUST999")
        assert self.storage.load("customers", "CUST999") is None
        assert self.storage.count("customers") == 1
        assert len(self.storage.load_all("customers")) == 1

        self.storage.clear_table("customers")
        assert self.storage.count("customers") == 0

    def test_loaded_records_are_copies(self):
        """Test that mutating a loaded record does not touch stored state"""
        self.storage.save("customers", "CUST001", {"id": "CUST001", "balance": "100.00"})

        loaded = self.storage.load("customers", "CUST001")
        loaded["balance"] = "0.00"

        assert self.storage.load("customers", "CUST001")["balance"] == "100.00"

    def test_atomic_commit(self):
        """Test that writes inside atomic() land together"""
        with self.storage.atomic():
            self.storage.save("customers", "A", {"id": "A"})
            self.storage.save("customers", "B", {"id": "B"})
            # Staged, not yet visible
            assert not self.storage.exists("customers", "A")

        assert self.storage.exists("customers", "A")
        assert self.storage.exists("customers", "B")

    def test_atomic_rollback(self):
        """Test that a failing atomic block writes nothing"""
        self.storage.save("customers", "A", {"id": "A", "balance": "1"})

        with pytest.raises(RuntimeError, match="boom"):
            with self.storage.atomic():
                self.storage.save("customers", "A", {"id": "A", "balance": "2"})
                self.storage.save("customers", "B", {"id": "B"})
                raise RuntimeError("boom")

        assert self.storage.load("customers", "A")["balance"] == "1"
        assert not self.storage.exists("customers", "B")

    def test_nested_atomic_rejected(self):
        """Test that nesting atomic blocks is refused"""
        with pytest.raises(RuntimeError, match="Nested"):
            with self.storage.atomic():
                with self.storage.atomic():
                    pass
