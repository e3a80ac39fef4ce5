"""Horoscope pipeline: stages, scoring, and orchestration."""
