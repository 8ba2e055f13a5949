"""Client, settings and exceptions for qn."""
