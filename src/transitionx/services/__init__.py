"""Services module for TransitionX."""
