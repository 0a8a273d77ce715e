"""
Table Operations Module

Describes the vector table (database, table, column names) and renders the
DDL that creates it.
"""

from .schema import TableSchema, SchemaBuilder

__all__ = [
    'TableSchema',
    'SchemaBuilder',
]
