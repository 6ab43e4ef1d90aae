"""Host adapters that feed scripts and input lines to the engine."""
