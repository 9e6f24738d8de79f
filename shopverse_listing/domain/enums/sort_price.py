from enum import Enum


class SortPrice(str, Enum):
    """Price ordering accepted by the product listing endpoints."""

    NONE = ""
    LOW_TO_HIGH = "low-to-high"
    HIGH_TO_LOW = "high-to-low"
