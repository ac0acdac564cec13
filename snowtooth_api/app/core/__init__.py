"""
Core infrastructure: configuration, logging, domain errors, the
in-memory entity store and the notification bus.
"""
