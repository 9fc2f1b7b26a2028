"""Identifier and colour generation for new records."""

import random
import uuid

CATEGORY_COLORS = [
    "#4CAF50", "#FF9800", "#9C27B0", "#2196F3", "#795548",
    "#607D8B", "#E91E63", "#00BCD4", "#8BC34A", "#F44336",
    "#FF5722", "#3F51B5", "#009688", "#FFC107", "#673AB7",
]


def generate_id() -> str:
    """Return a new opaque record ID."""
    return uuid.uuid4().hex[:12]


def random_color() -> str:
    """Pick a display colour for a new category."""
    return random.choice(CATEGORY_COLORS)
