"""Hostaway availability gateway."""
