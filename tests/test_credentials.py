"""
Tests for the default credential pool
"""

import pytest

from atm_banking.credentials import CredentialPool, DefaultCredential
from atm_banking.errors import PoolExhausted, ErrorKind


class TestCredentialPool:
    """Test issuing order and exhaustion"""

    def test_seeded_inventory(self):
        """Test the default ten pairs"""
        pool = CredentialPool.seeded()
        assert pool.remaining == 10

    def test_issued_last_seeded_first(self):
        """Test that pairs come out in reverse seed order"""
        pool = CredentialPool.seeded()

        issued = [pool.issue_next() for _ in range(10)]

        assert [c.customer_id for c in issued] == [f"CUST{n:03d}" for n in range(10, 0, -1)]
        assert issued[0] == DefaultCredential("CUST010", "PASS010")
        assert issued[-1] == DefaultCredential("CUST001", "PASS001")

    def test_exhaustion(self):
        """Test that the eleventh issue fails"""
        pool = CredentialPool.seeded()
        for _ in range(10):
            pool.issue_next()

        assert pool.remaining == 0
        with pytest.raises(PoolExhausted) as exc_info:
            pool.issue_next()
        assert exc_info.value.kind == ErrorKind.POOL_EXHAUSTED

    def test_issued_pairs_are_never_reused(self):
        """Test that every issued pair is distinct"""
        pool = CredentialPool.seeded(size=5)
        issued = [pool.issue_next() for _ in range(5)]
        assert len(set(issued)) == 5

    def test_custom_seed(self):
        """Test explicit inventory and prefixes"""
        pool = CredentialPool([DefaultCredential("A", "1"), DefaultCredential("B", "2")])
        assert pool.issue_next().customer_id == "B"
        assert pool.issue_next().customer_id == "A"

        pool = CredentialPool.seeded(size=2, id_prefix="ATM", password_prefix="PIN")
        assert pool.issue_next() == DefaultCredential("ATM002", "PIN002")

    def test_credentials_are_immutable(self):
        """Test that issued pairs cannot be changed"""
        credential = CredentialPool.seeded(size=1).issue_next()
        with pytest.raises(AttributeError):
            credential.password = "changed"
