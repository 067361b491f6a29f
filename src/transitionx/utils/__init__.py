"""Shared utilities for TransitionX."""
