"""Receipt command-line tooling."""
