"""Command-line interface for seqhasher."""
