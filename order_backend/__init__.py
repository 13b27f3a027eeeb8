"""
                Restaurant Table Ordering Backend

REST backend for table-side ordering: menu lookup, order placement,
order listing and order status updates, backed by a hosted
relational database.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
