"""Rule-based scoring engine."""
