"""User Service.

A small REST service exposing list, create, update and delete operations
over a single relational ``users`` table.
"""

__version__ = "0.1.0"
