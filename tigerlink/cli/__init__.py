"""Command implementations for the tigerlink CLI."""
