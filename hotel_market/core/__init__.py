"""
Core infrastructure: logging and domain events.
"""
