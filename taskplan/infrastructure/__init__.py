"""Infrastructure layer for taskplan.

Concrete storage backends (taskplan.infrastructure.storage) and tabular
input parsing (taskplan.infrastructure.tabular).
"""
