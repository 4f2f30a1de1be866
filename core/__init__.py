"""Core Django app serving bubble chart options."""
