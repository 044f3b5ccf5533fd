"""
Tests for the FIFO access gate
"""

import threading
import time

import pytest

from atm_banking.access import AccessGate
from atm_banking.errors import NotYourTurn, ErrorKind


class TestAccessGate:
    """Test queue ordering and turn guarding"""

    def setup_method(self):
        self.gate = AccessGate()

    def test_empty_gate(self):
        """Test that nobody is at the front of an empty queue"""
        assert not self.gate.is_front("CUST001")
        assert self.gate.dequeue() is None
        assert len(self.gate) == 0

    def test_fifo_order(self):
        """Test only the earliest queued session is at the front"""
        for customer_id in ["CUST003", "CUST001", "CUST002"]:
            self.gate.enqueue(customer_id)

        assert self.gate.is_front("CUST003")
        assert not self.gate.is_front("CUST001")
        assert not self.gate.is_front("CUST002")

        assert self.gate.dequeue() == "CUST003"
        assert self.gate.is_front("CUST001")
        assert not self.gate.is_front("CUST003")

        assert self.gate.dequeue() == "CUST001"
        assert self.gate.is_front("CUST002")
        assert self.gate.waiting() == ["CUST002"]

    def test_duplicate_entries_allowed(self):
        """Test the same ID may be queued more than once"""
        self.gate.enqueue("CUST001")
        self.gate.enqueue("CUST001")

        assert len(self.gate) == 2
        self.gate.dequeue()
        assert self.gate.is_front("CUST001")

    def test_leave(self):
        """Test a waiting session can drop out of line"""
        for customer_id in ["CUST001", "CUST002", "CUST003"]:
            self.gate.enqueue(customer_id)

        assert self.gate.leave("CUST002")
        assert not self.gate.leave("CUST404")
        assert self.gate.waiting() == ["CUST001", "CUST003"]
        assert self.gate.contains("CUST003")
        assert not self.gate.contains("CUST002")

    def test_release(self):
        """Test release() dequeues the head or removes a waiting entry"""
        for customer_id in ["CUST001", "CUST002", "CUST003"]:
            self.gate.enqueue(customer_id)

        assert self.gate.release("CUST002")
        assert self.gate.waiting() == ["CUST001", "CUST003"]

        assert self.gate.release("CUST001")
        assert self.gate.is_front("CUST003")

        assert not self.gate.release("CUST001")

    def test_turn_for_head(self):
        """Test the head session may act"""
        self.gate.enqueue("CUST001")

        ran = []
        with self.gate.turn("CUST001"):
            ran.append(True)
        assert ran == [True]

    def test_turn_refused_for_others(self):
        """Test non-head sessions are refused"""
        self.gate.enqueue("CUST001")
        self.gate.enqueue("CUST002")

        with pytest.raises(NotYourTurn) as exc_info:
            with self.gate.turn("CUST002"):
                pytest.fail("block must not run")
        assert exc_info.value.kind == ErrorKind.ACCESS_DENIED

    def test_turn_blocks_concurrent_dequeue(self):
        """Test another thread cannot dequeue while a turn is in progress"""
        self.gate.enqueue("CUST001")
        self.gate.enqueue("CUST002")

        inside = threading.Event()
        observed = []

        def remove_head():
            inside.wait()
            self.gate.dequeue()

        worker = threading.Thread(target=remove_head)
        worker.start()

        with self.gate.turn("CUST001"):
            inside.set()
            time.sleep(0.05)
            observed.append(self.gate.is_front("CUST001"))

        worker.join(timeout=5)
        assert observed == [True]
        assert self.gate.is_front("CUST002")
