"""Platform transport layers (pure I/O, no agent logic)."""
