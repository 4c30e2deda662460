"""Entratel receipt notice to PDF converter."""
