from .field_validators import check_length, to_uppercase, to_lowercase
from .uniqueness import find_unique_conflict, get_unique_column_sets

__all__ = ["check_length", "to_uppercase", "to_lowercase", "find_unique_conflict", "get_unique_column_sets"]
