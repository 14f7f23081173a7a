"""Personal-finance ledger core: paired double-entry transactions."""
