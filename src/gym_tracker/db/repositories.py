"""Data access layer for gym-tracker.

Every operation takes the current user id explicitly. When no user is
signed in (``None`` or empty id) reads return empty results and writes are
skipped.
"""

import asyncio
import logging
from datetime import date as date_cls

from ..errors import InvalidReference
from ..models.attendance import (
    AttendanceRecord,
    TrainingType,
    parse_date,
    utc_now_iso,
)
from ..models.ingredients import COMMON_INGREDIENTS
from ..models.stats import MigrationResult
from ..models.supplements import (
    Ingredient,
    IngredientLine,
    ProductSnapshot,
    SupplementLog,
    SupplementProduct,
)
from ..models.user_profile import Theme, UserProfile
from ..utils.ids import IdGenerator
from . import paths
from .backends import StorageBackend

logger = logging.getLogger(__name__)


class AttendanceRepository:
    """Repository for attendance records and training types."""

    def __init__(self, backend: StorageBackend, ids: IdGenerator | None = None):
        self.backend = backend
        self.ids = ids or IdGenerator()

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    async def mark_attendance(
        self,
        user_id: str | None,
        date: str,
        training_type_id: str | None = None,
        duration_minutes: int | None = None,
        notes: str | None = None,
    ) -> AttendanceRecord | None:
        """Create or overwrite the record for one day.

        Absent optional fields are written as null so an overwrite never
        keeps stale values from an earlier mark.
        """
        if not user_id:
            return None
        parse_date(date)
        if duration_minutes is not None and duration_minutes < 0:
            raise ValueError("Duration must be zero or more minutes")

        record = AttendanceRecord(
            date=date,
            timestamp=utc_now_iso(),
            training_type_id=training_type_id or None,
            duration_minutes=duration_minutes,
            notes=notes or None,
        )
        await self.backend.set(
            paths.attendance_days(user_id, record.year_month), date, record.to_dict()
        )
        logger.info("Attendance marked for user %s on %s", user_id, date)
        return record

    async def remove_attendance(self, user_id: str | None, date: str) -> None:
        """Delete the record for one day (no-op if there is none)."""
        if not user_id:
            return
        parse_date(date)
        await self.backend.delete(
            paths.attendance_days(user_id, paths.bucket_key(date)), date
        )
        logger.info("Attendance removed for user %s on %s", user_id, date)

    async def _get_bucket(self, user_id: str, bucket: str) -> list[AttendanceRecord]:
        documents = await self.backend.list_collection(
            paths.attendance_days(user_id, bucket)
        )
        records = []
        for doc in documents:
            record = AttendanceRecord.from_dict({**doc.data, "date": doc.data.get("date") or doc.id})
            if record.year_month == bucket:
                records.append(record)
        records.sort(key=lambda r: r.date)
        logger.debug("Found %d attendance records for %s in %s", len(records), user_id, bucket)
        return records

    async def get_month(
        self, user_id: str | None, year: int, month: int
    ) -> list[AttendanceRecord]:
        """All records in one year-month bucket, ordered by date."""
        if not user_id:
            return []
        return await self._get_bucket(user_id, paths.month_bucket(year, month))

    async def get_year(self, user_id: str | None, year: int) -> list[AttendanceRecord]:
        """All records of a year; the 12 months are fetched concurrently."""
        if not user_id:
            return []
        months = await asyncio.gather(
            *(self.get_month(user_id, year, month) for month in range(1, 13))
        )
        records = [record for month_records in months for record in month_records]
        logger.debug("Found %d attendance records for %s in %d", len(records), user_id, year)
        return records

    async def get_range(
        self, user_id: str | None, start: str, end: str
    ) -> list[AttendanceRecord]:
        """Records with ``start <= date <= end`` (inclusive ISO dates)."""
        if not user_id:
            return []
        start_date, end_date = parse_date(start), parse_date(end)
        buckets = paths.buckets_between(start_date, end_date)
        results = await asyncio.gather(*(self._get_bucket(user_id, b) for b in buckets))
        return [
            record
            for bucket_records in results
            for record in bucket_records
            if start <= record.date <= end
        ]

    async def toggle_attendance(self, user_id: str | None, date: str) -> bool:
        """Flip presence for a day and return the new state.

        Read-then-write with no isolation: two sessions toggling the same
        day concurrently can interleave, and the last write wins.
        """
        if not user_id:
            return False
        day = parse_date(date)
        month_records = await self.get_month(user_id, day.year, day.month)
        if any(record.date == date for record in month_records):
            await self.remove_attendance(user_id, date)
            return False
        await self.mark_attendance(user_id, date)
        return True

    async def backfill_duration(
        self,
        user_id: str | None,
        years: list[int] | None = None,
        today: date_cls | None = None,
    ) -> MigrationResult:
        """Add an explicit null ``durationMinutes`` to records that lack the field.

        Defaults to the current year and the two before it.
        """
        result = MigrationResult()
        if not user_id:
            return result
        if years is None:
            current = (today or date_cls.today()).year
            years = [current - 2, current - 1, current]

        logger.info("Starting duration backfill for user %s over %s", user_id, years)
        for year in years:
            collections = [
                paths.attendance_days(user_id, paths.month_bucket(year, month))
                for month in range(1, 13)
            ]
            listings = await asyncio.gather(
                *(self.backend.list_collection(c) for c in collections)
            )
            for collection, documents in zip(collections, listings):
                for doc in documents:
                    result.total += 1
                    if "durationMinutes" not in doc.data:
                        await self.backend.set(
                            collection, doc.id, {"durationMinutes": None}, merge=True
                        )
                        result.migrated += 1

        logger.info(
            "Duration backfill complete: %d/%d records updated",
            result.migrated,
            result.total,
        )
        return result

    # ------------------------------------------------------------------
    # Training types
    # ------------------------------------------------------------------

    async def list_training_types(self, user_id: str | None) -> list[TrainingType]:
        if not user_id:
            return []
        documents = await self.backend.list_collection(paths.training_types(user_id))
        types = [TrainingType.from_dict(doc.data, id=doc.id) for doc in documents]
        types.sort(key=lambda t: (t.name.lower(), t.id))
        logger.debug("Loaded %d training types for user %s", len(types), user_id)
        return types

    async def get_training_type(
        self, user_id: str | None, type_id: str
    ) -> TrainingType | None:
        if not user_id:
            return None
        data = await self.backend.get(paths.training_types(user_id), type_id)
        return TrainingType.from_dict(data, id=type_id) if data is not None else None

    async def create_training_type(
        self, user_id: str | None, name: str, color: str, icon: str | None = None
    ) -> str | None:
        """Create a training type and return its new id."""
        if not user_id:
            return None
        if not name.strip():
            raise ValueError("Training type name is required")
        training_type = TrainingType(
            id=self.ids.new_id(), name=name.strip(), color=color, icon=icon or None
        )
        await self.backend.set(
            paths.training_types(user_id), training_type.id, training_type.to_dict()
        )
        logger.info("Training type created for user %s: %s", user_id, training_type.name)
        return training_type.id

    async def update_training_type(
        self,
        user_id: str | None,
        type_id: str,
        name: str | None = None,
        color: str | None = None,
        icon: str | None = None,
    ) -> bool:
        """Update fields in place. Returns False when the type does not exist."""
        existing = await self.get_training_type(user_id, type_id)
        if existing is None:
            return False
        changes = {}
        if name is not None:
            changes["name"] = name.strip()
        if color is not None:
            changes["color"] = color
        if icon is not None:
            changes["icon"] = icon or None
        if changes:
            await self.backend.set(
                paths.training_types(user_id), type_id, changes, merge=True
            )
            logger.info("Training type updated for user %s: %s", user_id, type_id)
        return True

    async def delete_training_type(self, user_id: str | None, type_id: str) -> None:
        """Delete a type; records that reference it are left as they are."""
        if not user_id:
            return
        await self.backend.delete(paths.training_types(user_id), type_id)
        logger.info("Training type deleted for user %s: %s", user_id, type_id)


class SupplementRepository:
    """Repository for the ingredient/product catalogs and supplement logs."""

    def __init__(self, backend: StorageBackend, ids: IdGenerator | None = None):
        self.backend = backend
        self.ids = ids or IdGenerator()

    # ------------------------------------------------------------------
    # Ingredients (global)
    # ------------------------------------------------------------------

    async def list_ingredients(self) -> list[Ingredient]:
        documents = await self.backend.list_collection(paths.ingredients())
        ingredients = [Ingredient.from_dict(doc.data, id=doc.id) for doc in documents]
        ingredients.sort(key=lambda i: (i.name.lower(), i.id))
        return ingredients

    async def get_ingredient(self, std_id: str) -> Ingredient | None:
        data = await self.backend.get(paths.ingredients(), std_id)
        return Ingredient.from_dict(data, id=std_id) if data is not None else None

    async def seed_if_empty(self) -> int:
        """Populate the reference ingredient set once.

        Returns the number of ingredients written (0 when the catalog
        already has entries).
        """
        existing = await self.backend.list_collection(paths.ingredients())
        if existing:
            return 0
        logger.info("Seeding ingredient catalog with %d entries", len(COMMON_INGREDIENTS))
        await asyncio.gather(
            *(
                self.backend.set(paths.ingredients(), ing.id, ing.to_dict())
                for ing in COMMON_INGREDIENTS
            )
        )
        return len(COMMON_INGREDIENTS)

    async def search_ingredients(self, term: str) -> list[Ingredient]:
        """Case-insensitive substring search over name, id and aliases."""
        return [ing for ing in await self.list_ingredients() if ing.matches(term)]

    async def compose_ingredient_line(
        self,
        std_id: str,
        amount: float,
        unit: str | None = None,
        catalog: list[Ingredient] | None = None,
    ) -> IngredientLine | InvalidReference:
        """Build an ingredient line, checking the std id against the catalog.

        The unit defaults to the ingredient's default unit.
        """
        if amount < 0:
            raise ValueError("Ingredient amount must be zero or more")
        if catalog is None:
            ingredient = await self.get_ingredient(std_id)
        else:
            ingredient = next((i for i in catalog if i.id == std_id), None)
        if ingredient is None:
            return InvalidReference(std_id=std_id)
        return IngredientLine(
            std_id=ingredient.id, amount=amount, unit=unit or ingredient.default_unit
        )

    async def validate_ingredients(
        self, lines: list[IngredientLine]
    ) -> InvalidReference | None:
        """Return the first line whose std id is not in the catalog."""
        known = {ing.id for ing in await self.list_ingredients()}
        for index, line in enumerate(lines):
            if line.std_id not in known:
                return InvalidReference(std_id=line.std_id, line_index=index)
            if line.amount < 0:
                raise ValueError("Ingredient amount must be zero or more")
        return None

    # ------------------------------------------------------------------
    # Products (global)
    # ------------------------------------------------------------------

    async def list_products(self) -> list[SupplementProduct]:
        documents = await self.backend.list_collection(paths.products())
        products = [SupplementProduct.from_dict(doc.data, id=doc.id) for doc in documents]
        products.sort(key=lambda p: (p.name.lower(), p.id))
        return products

    async def get_product(self, product_id: str) -> SupplementProduct | None:
        data = await self.backend.get(paths.products(), product_id)
        return SupplementProduct.from_dict(data, id=product_id) if data is not None else None

    async def search_products(self, term: str) -> list[SupplementProduct]:
        lower = term.lower()
        return [
            p
            for p in await self.list_products()
            if lower in p.name.lower() or lower in p.brand.lower()
        ]

    async def products_created_by(self, user_id: str | None) -> list[SupplementProduct]:
        if not user_id:
            return []
        return [p for p in await self.list_products() if p.created_by == user_id]

    async def add_product(
        self,
        user_id: str | None,
        name: str,
        brand: str,
        ingredients: list[IngredientLine],
        servings_per_day_default: float = 1,
    ) -> str | InvalidReference | None:
        """Add a product to the global catalog.

        Returns the new id, or an InvalidReference (and writes nothing) if
        any ingredient line names an unknown std id.
        """
        if not user_id:
            return None
        if not name.strip():
            raise ValueError("Product name is required")
        invalid = await self.validate_ingredients(ingredients)
        if invalid is not None:
            logger.warning("Rejected product '%s': %s", name, invalid.message)
            return invalid

        product = SupplementProduct(
            id=self.ids.new_id(),
            name=name.strip(),
            brand=brand.strip(),
            ingredients=list(ingredients),
            servings_per_day_default=servings_per_day_default,
            created_by=user_id,
        )
        await self.backend.set(paths.products(), product.id, product.to_dict())
        logger.info("Product added by %s: %s (%s)", user_id, product.name, product.id)
        return product.id

    async def update_product(
        self,
        product_id: str,
        name: str | None = None,
        brand: str | None = None,
        ingredients: list[IngredientLine] | None = None,
        servings_per_day_default: float | None = None,
    ) -> InvalidReference | None:
        """Partially update a product; unknown ids are a no-op."""
        if await self.get_product(product_id) is None:
            return None
        changes: dict = {}
        if ingredients is not None:
            invalid = await self.validate_ingredients(ingredients)
            if invalid is not None:
                return invalid
            changes["ingredients"] = [line.to_dict() for line in ingredients]
        if name is not None:
            changes["name"] = name.strip()
        if brand is not None:
            changes["brand"] = brand.strip()
        if servings_per_day_default is not None:
            changes["servingsPerDayDefault"] = servings_per_day_default
        if changes:
            await self.backend.set(paths.products(), product_id, changes, merge=True)
            logger.info("Product updated: %s", product_id)
        return None

    async def delete_product(self, product_id: str) -> None:
        """Delete a product. Existing logs keep their snapshot text."""
        await self.backend.delete(paths.products(), product_id)
        logger.info("Product deleted: %s", product_id)

    # ------------------------------------------------------------------
    # Supplement logs (per user, bucketed)
    # ------------------------------------------------------------------

    async def log_supplement(
        self,
        user_id: str | None,
        date: str,
        product_id: str,
        servings: float,
        snapshot: ProductSnapshot | None = None,
    ) -> SupplementLog | None:
        """Record an intake. Every call creates a new log with a fresh id."""
        if not user_id:
            return None
        parse_date(date)
        log = SupplementLog(
            id=self.ids.new_id(),
            date=date,
            product_id=product_id,
            servings_taken=servings,
            product_name=snapshot.name if snapshot else None,
            product_brand=(snapshot.brand or None) if snapshot else None,
            timestamp=utc_now_iso(),
        )
        await self.backend.set(
            paths.health_log_entries(user_id, log.year_month), log.id, log.to_dict()
        )
        logger.info("Supplement logged for user %s on %s: %s", user_id, date, product_id)
        return log

    async def _get_bucket(self, user_id: str, bucket: str) -> list[SupplementLog]:
        documents = await self.backend.list_collection(
            paths.health_log_entries(user_id, bucket)
        )
        logs = [
            SupplementLog.from_dict(doc.data, id=doc.id)
            for doc in documents
            if isinstance(doc.data.get("date"), str)
        ]
        logs = [log for log in logs if log.year_month == bucket]
        logs.sort(key=lambda log: (log.date, log.timestamp or "", log.id))
        return logs

    async def get_supplement_logs(
        self, user_id: str | None, year: int, month: int
    ) -> list[SupplementLog]:
        if not user_id:
            return []
        return await self._get_bucket(user_id, paths.month_bucket(year, month))

    async def get_year_logs(self, user_id: str | None, year: int) -> list[SupplementLog]:
        """All logs of a year; the 12 buckets are fetched concurrently."""
        if not user_id:
            return []
        months = await asyncio.gather(
            *(self.get_supplement_logs(user_id, year, month) for month in range(1, 13))
        )
        return [log for month_logs in months for log in month_logs]

    async def get_day_logs(self, user_id: str | None, date: str) -> list[SupplementLog]:
        if not user_id:
            return []
        day = parse_date(date)
        logs = await self.get_supplement_logs(user_id, day.year, day.month)
        return [log for log in logs if log.date == date]

    async def remove_supplement_log(
        self, user_id: str | None, log_id: str, date: str
    ) -> None:
        """Delete one log; the date locates its bucket."""
        if not user_id:
            return
        parse_date(date)
        await self.backend.delete(
            paths.health_log_entries(user_id, paths.bucket_key(date)), log_id
        )
        logger.info("Supplement log removed for user %s: %s", user_id, log_id)


class UserProfileRepository:
    """Repository for user profiles and theme preference."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    async def get_profile(self, user_id: str | None) -> UserProfile | None:
        if not user_id:
            return None
        data = await self.backend.get(paths.USERS, user_id)
        return UserProfile.from_dict(data) if data is not None else None

    async def ensure_profile(
        self, user_id: str | None, email: str, display_name: str | None = None
    ) -> UserProfile | None:
        """Create the profile on first sign-in and refresh the login time."""
        if not user_id:
            return None
        now = utc_now_iso()
        existing = await self.get_profile(user_id)
        changes = {"email": email, "lastLoginAt": now}
        if display_name is not None:
            changes["displayName"] = display_name
        if existing is None:
            changes["createdAt"] = now
        await self.backend.set(paths.USERS, user_id, changes, merge=True)
        logger.info("User profile created/updated for: %s", user_id)
        return await self.get_profile(user_id)

    async def update_last_login(self, user_id: str | None) -> None:
        if not user_id:
            return
        await self.backend.set(
            paths.USERS, user_id, {"lastLoginAt": utc_now_iso()}, merge=True
        )

    async def get_theme(self, user_id: str | None) -> Theme | None:
        profile = await self.get_profile(user_id)
        return profile.theme if profile else None

    async def set_theme(self, user_id: str | None, theme: Theme) -> None:
        if not user_id:
            return
        await self.backend.set(paths.USERS, user_id, {"theme": theme.value}, merge=True)
        logger.info("Theme for %s set to %s", user_id, theme.value)
