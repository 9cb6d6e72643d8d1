"""
Preferences subsystem for the warehouse-management application.

Typed application-, module-, role- and user-scoped preferences persisted with
SQLAlchemy and accessed through a small data-access layer.
"""

__version__ = "1.0.0"
