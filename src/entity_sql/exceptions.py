"""
Exception hierarchy for SQL statement synthesis.

Every failure is deterministic: the same descriptor and instance always
produce the same error, so none of these are retryable. Builders raise
before returning, never alongside a partially built fragment.
"""

from typing import Any, Dict, Optional


class SqlBuildError(Exception):
    """
    Base exception for all statement synthesis errors.

    Args:
        message: Error description
        table: Table whose statement was being built (optional)
        column: Column involved in the failure (optional)
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        column: Optional[str] = None,
    ):
        self.table = table
        self.column = column

        # Build contextual error message
        context_parts = []
        if table:
            context_parts.append(f"table='{table}'")
        if column:
            context_parts.append(f"column='{column}'")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        result: Dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": str(self),
        }
        if self.table:
            result["table"] = self.table
        if self.column:
            result["column"] = self.column
        return result


class MissingKeyColumnError(SqlBuildError):
    """Raised when a key-based operation targets a type without key columns."""

    def __init__(self, table: Optional[str] = None):
        super().__init__("Entity declares no key column", table=table)


class NullKeyValueError(SqlBuildError):
    """Raised when a key column holds None while building a key predicate."""

    def __init__(self, column: str, table: Optional[str] = None):
        super().__init__("Key column value must not be null", table=table, column=column)


class MissingJoinConditionError(SqlBuildError):
    """Raised when a join descriptor has an empty ON condition."""

    def __init__(self, left_table: Optional[str] = None, right_table: Optional[str] = None):
        self.right_table = right_table
        message = "Join requires a non-empty on condition"
        if right_table:
            message = f"{message} (right_table='{right_table}')"
        super().__init__(message, table=left_table)


class MalformedWhereClauseError(SqlBuildError):
    """Raised when WHERE or condition text cannot be parsed as a boolean expression."""

    def __init__(self, sql_text: str, reason: Optional[str] = None):
        self.sql_text = sql_text
        self.reason = reason
        message = f"Malformed where clause: {sql_text!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["sql_text"] = self.sql_text
        return result


class UnmappedTypeError(SqlBuildError):
    """Raised by a metadata provider that cannot describe the given type."""

    def __init__(self, entity_type: Any):
        self.entity_type = entity_type
        name = getattr(entity_type, "__qualname__", repr(entity_type))
        super().__init__(f"Type is not mapped to a table: {name}")
