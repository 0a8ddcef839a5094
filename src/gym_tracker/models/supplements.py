"""Supplement catalog and intake log models."""

from dataclasses import dataclass, field

from .attendance import as_iso, as_number


@dataclass
class Ingredient:
    """A standard nutrient/ingredient in the global catalog.

    ``id`` is the std id referenced by product ingredient lines.
    """

    id: str
    name: str
    default_unit: str
    category: str
    aliases: list[str] = field(default_factory=list)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over name, id and aliases."""
        lower = term.lower()
        return (
            lower in self.name.lower()
            or lower in self.id.lower()
            or any(lower in alias.lower() for alias in self.aliases)
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "defaultUnit": self.default_unit,
            "category": self.category,
            "aliases": self.aliases or None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: str | None = None) -> "Ingredient":
        return cls(
            id=id or data["id"],
            name=data.get("name", ""),
            default_unit=data.get("defaultUnit", ""),
            category=data.get("category", "Other"),
            aliases=list(data.get("aliases") or []),
        )


@dataclass
class IngredientLine:
    """Amount of one catalog ingredient in a single serving of a product."""

    std_id: str
    amount: float
    unit: str

    def to_dict(self) -> dict:
        return {"stdId": self.std_id, "amount": self.amount, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: dict) -> "IngredientLine":
        amount = as_number(data.get("amount"))
        return cls(
            std_id=data.get("stdId", ""),
            amount=amount if amount is not None else 0,
            unit=data.get("unit", ""),
        )


@dataclass
class SupplementProduct:
    """A product in the global catalog; ``created_by`` is soft ownership."""

    id: str
    name: str
    brand: str
    ingredients: list[IngredientLine] = field(default_factory=list)
    servings_per_day_default: float = 1
    created_by: str | None = None

    @property
    def snapshot(self) -> "ProductSnapshot":
        return ProductSnapshot(name=self.name, brand=self.brand or None)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "brand": self.brand,
            "ingredients": [line.to_dict() for line in self.ingredients],
            "servingsPerDayDefault": self.servings_per_day_default,
            "createdBy": self.created_by,
        }

    @classmethod
    def from_dict(cls, data: dict, id: str) -> "SupplementProduct":
        servings = as_number(data.get("servingsPerDayDefault"))
        return cls(
            id=id,
            name=data.get("name", ""),
            brand=data.get("brand") or "",
            ingredients=[
                IngredientLine.from_dict(line)
                for line in data.get("ingredients") or []
                if isinstance(line, dict)
            ],
            servings_per_day_default=servings if servings else 1,
            created_by=data.get("createdBy") or None,
        )


@dataclass(frozen=True)
class ProductSnapshot:
    """Display text frozen into a log at logging time."""

    name: str
    brand: str | None = None


@dataclass
class SupplementLog:
    """One intake event. Several logs per product per day add up."""

    id: str
    date: str  # YYYY-MM-DD
    product_id: str
    servings_taken: float
    product_name: str | None = None
    product_brand: str | None = None
    timestamp: str | None = None

    @property
    def year_month(self) -> str:
        return self.date[:7]

    def to_dict(self) -> dict:
        """Convert to the stored document (the id is the document id)."""
        return {
            "date": self.date,
            "productId": self.product_id,
            "servingsTaken": self.servings_taken,
            "productName": self.product_name,
            "productBrand": self.product_brand,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict, id: str) -> "SupplementLog":
        servings = as_number(data.get("servingsTaken"))
        return cls(
            id=id,
            date=data.get("date", ""),
            product_id=data.get("productId", ""),
            servings_taken=servings if servings is not None else 0,
            product_name=data.get("productName") or None,
            product_brand=data.get("productBrand") or None,
            timestamp=as_iso(data.get("timestamp")),
        )
