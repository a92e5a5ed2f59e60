"""Utility modules for assertgen."""
