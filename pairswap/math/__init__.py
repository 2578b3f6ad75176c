"""Integer math helpers shared by pair and search code."""

from pairswap.math.sorted_list import BoundedSortedList, Comparator, sorted_insert
from pairswap.math.sqrt import sqrt, validate_solidity_type_instance

__all__ = [
    "BoundedSortedList",
    "Comparator",
    "sorted_insert",
    "sqrt",
    "validate_solidity_type_instance",
]
