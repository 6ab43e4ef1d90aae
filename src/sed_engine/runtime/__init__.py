"""Runtime services shared by the compiler, engine and adapters."""
