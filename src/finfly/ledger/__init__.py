"""Transaction ledger."""
