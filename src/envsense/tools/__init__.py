"""Development helpers (opt-in timing instrumentation)."""
