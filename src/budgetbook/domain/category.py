"""Category domain service."""

from decimal import Decimal
from typing import Any, Optional

from budgetbook.domain import errors
from budgetbook.domain.entities import Category
from budgetbook.domain.errors import NotFoundError, ValidationError
from budgetbook.domain.patches import CategoryPatch, apply_category_patch
from budgetbook.domain.store import EntityStore
from budgetbook.domain.validation import validate_budget, validate_name, validate_optional_text
from budgetbook.utils.identifiers import generate_id, random_color

UNCATEGORIZED = "Uncategorized"

# Quick-add suggestions offered until a category with the same name exists
DEFAULT_CATEGORIES = [
    ("Groceries", "#4CAF50", "🛒"),
    ("Food & Dining", "#FF9800", "🍽️"),
    ("Maid & Services", "#9C27B0", "🧹"),
    ("Rent", "#2196F3", "🏠"),
    ("House & Maintenance", "#795548", "🔧"),
    ("Utilities", "#607D8B", "⚡"),
    ("Entertainment", "#E91E63", "🎬"),
    ("Transport", "#00BCD4", "🚗"),
    ("Savings", "#8BC34A", "💰"),
    ("Healthcare", "#F44336", "🏥"),
    ("Shopping", "#FF5722", "🛍️"),
    ("Education", "#3F51B5", "📚"),
]


class CategoryService:
    """Service for managing categories."""

    def __init__(self, store: EntityStore):
        """Initialize category service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def create_category(
        self,
        name: str,
        budget: Any,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name
            budget: Monthly budget (zero allowed, negative rejected)
            color: Optional display colour (random palette colour if omitted)
            icon: Optional icon

        Returns:
            The created category

        Raises:
            ValidationError: If name is empty or budget is invalid
        """
        category = Category(
            id=generate_id(),
            name=validate_name(name),
            budget=validate_budget(budget),
            color=color or random_color(),
            icon=validate_optional_text(icon, "Icon"),
        )
        self.store.add_category(category)
        return category

    def update_category(self, category_id: str, patch: CategoryPatch) -> Category:
        """Apply a partial update to a category.

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If any supplied field is invalid
        """
        category = self.require_category(category_id)
        updated = apply_category_patch(category, patch)
        self.store.update_category(updated)
        return updated

    def delete_category(self, category_id: str) -> None:
        """Delete a category. Transactions referencing it are left untouched.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        self.store.delete_category(category_id)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self.store.get_category(category_id)

    def require_category(self, category_id: str) -> Category:
        category = self.store.get_category(category_id)
        if category is None:
            raise NotFoundError(errors.category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Find the first category whose name matches, ignoring case."""
        wanted = name.strip().lower()
        for category in self.store.categories:
            if category.name.lower() == wanted:
                return category
        return None

    def list_categories(self) -> list[Category]:
        return list(self.store.categories)

    def category_name(self, category_id: str) -> str:
        """Return the category's name, or "Uncategorized" for dangling IDs."""
        category = self.store.get_category(category_id)
        return category.name if category is not None else UNCATEGORIZED

    def total_budget(self) -> Decimal:
        return sum((category.budget for category in self.store.categories), Decimal("0"))

    def available_suggestions(self) -> list[tuple[str, str, str]]:
        """Default categories whose name is not already in use."""
        existing = {category.name for category in self.store.categories}
        return [suggestion for suggestion in DEFAULT_CATEGORIES if suggestion[0] not in existing]

    def quick_add(self, name: str) -> Category:
        """Create a suggested category with a zero budget.

        Raises:
            ValidationError: If ``name`` is not an available suggestion
        """
        for suggestion_name, color, icon in self.available_suggestions():
            if suggestion_name == name:
                return self.create_category(name=name, budget=0, color=color, icon=icon)
        raise ValidationError(errors.unknown_suggestion(name))
