"""Core exceptions and configuration for TransitionX."""
