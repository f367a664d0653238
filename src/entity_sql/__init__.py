"""
entity-sql - Parameterized SQL synthesis from entity metadata.

Builds SELECT/INSERT/UPDATE/DELETE text and ordered bound values from
declarative descriptions of how a domain object maps to one table, or to a
two-table join, with soft-delete filtering merged into WHERE clauses at the
expression level.
"""

__version__ = "0.1.0"
