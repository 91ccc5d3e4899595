"""Domain models for the customer CSV parser.

This package contains the value types passed between the validator,
transformer, format parsers and the error sink.
"""

from .customer_record import CustomerRecord
from .error_record import ErrorEntry, ErrorKind
from .fields import FieldRole, role_for
from .processing_result import FileStat, FileStatus, ProcessingResult
from .validation_outcome import ValidationOutcome

__all__ = [
    # Records
    "CustomerRecord",
    "FieldRole",
    "role_for",
    # Validation / errors
    "ValidationOutcome",
    "ErrorEntry",
    "ErrorKind",
    # Run results
    "FileStat",
    "FileStatus",
    "ProcessingResult",
]
