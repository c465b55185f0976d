"""Command line interface for vs-dataview."""
