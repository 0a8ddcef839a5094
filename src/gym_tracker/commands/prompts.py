"""Interactive product entry with ingredient autocomplete."""

import questionary
from questionary import Style

from ..models.supplements import Ingredient

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def ingredient_label(ingredient: Ingredient) -> str:
    return f"{ingredient.name} [{ingredient.id}]"


class ProductForm:
    """Collects a product's fields and ingredient lines from the terminal.

    Ingredient names are completed from the catalog, so every line refers
    to an existing std id.
    """

    def __init__(self, catalog: list[Ingredient]):
        self.catalog = catalog
        self._by_label = {ingredient_label(i): i for i in catalog}

    def _validate_amount(self, text: str) -> bool | str:
        try:
            return float(text) >= 0 or "Amount must be zero or more"
        except ValueError:
            return "Enter a number"

    async def collect(self) -> dict | None:
        """Run the form; returns None when the user aborts."""
        name = await questionary.text(
            "Product name:",
            validate=lambda text: bool(text.strip()) or "Name is required",
            style=custom_style,
        ).ask_async()
        if name is None:
            return None

        brand = await questionary.text("Brand:", style=custom_style).ask_async()
        if brand is None:
            return None
        servings = await questionary.text(
            "Servings per day:",
            default="1",
            validate=self._validate_amount,
            style=custom_style,
        ).ask_async()
        if servings is None:
            return None

        lines = []
        while True:
            label = await questionary.autocomplete(
                "Ingredient:",
                choices=list(self._by_label),
                ignore_case=True,
                match_middle=True,
                validate=lambda text: text in self._by_label or "Pick an ingredient from the list",
                style=custom_style,
            ).ask_async()
            if label is None:
                return None
            ingredient = self._by_label[label]

            amount = await questionary.text(
                f"Amount per serving ({ingredient.default_unit}):",
                validate=self._validate_amount,
                style=custom_style,
            ).ask_async()
            if amount is None:
                return None
            unit = await questionary.text(
                "Unit:", default=ingredient.default_unit, style=custom_style
            ).ask_async()
            if unit is None:
                return None
            lines.append((ingredient.id, float(amount), unit or ingredient.default_unit))

            more = await questionary.confirm(
                "Add another ingredient?", default=False, style=custom_style
            ).ask_async()
            if more is None:
                return None
            if not more:
                break

        return {
            "name": name.strip(),
            "brand": (brand or "").strip(),
            "servings_per_day_default": float(servings or 1),
            "lines": lines,
        }
