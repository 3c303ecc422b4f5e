"""Domain layer for taskplan.

Pure models, value objects and rules. Nothing in this package performs
I/O; storage and input parsing live in taskplan.infrastructure.
"""
