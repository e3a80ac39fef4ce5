"""Ephemeris acquisition: Horizons client, parser, fallback, and assembler."""
