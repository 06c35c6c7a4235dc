"""
Contract Validation Module

JSON Schema контракты внешнего представления десятичных чисел.
"""

from .validators import (
    NUMBER_LITERAL,
    NUMBER_PARTS,
    SCHEMA_DIR,
    Contract,
    SchemaLoader,
    validate_number_literal,
    validate_number_parts,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "Contract",
    # Contracts
    "NUMBER_LITERAL",
    "NUMBER_PARTS",
    "SCHEMA_DIR",
    # Functions
    "validate_number_literal",
    "validate_number_parts",
]
