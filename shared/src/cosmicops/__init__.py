"""Shared configuration, schemas, and storage for cosmicops."""
