"""Domain models and pipeline stages of the capital-gains engine.

Transactions are grouped per asset, matched FIFO into disposals, run through a
jurisdiction policy and aggregated into a TaxReport. Everything here is pure
and in-memory so that it can be tested without any I/O.
"""

__all__ = [
    "engine",
    "errors",
    "jurisdictions",
    "matching",
    "partition",
    "report",
    "transactions",
]
