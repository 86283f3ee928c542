"""Lighthouse CI rc file resolution."""
