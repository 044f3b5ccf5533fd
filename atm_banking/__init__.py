"""
ATM Banking Backend

Customer ledger, default credential issuance, single-session access gate
and a transaction engine enforcing minimum-balance and penalty rules.
All monetary values use Decimal.
"""

__version__ = "1.0.0"
