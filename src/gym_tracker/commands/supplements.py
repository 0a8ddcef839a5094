"""Supplement catalog and intake log commands."""

import click

from ..db import SupplementRepository
from ..errors import InvalidReference
from ..models.supplements import IngredientLine, SupplementLog
from ..services.aggregation import daily_product_summary
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    format_table,
    open_backend,
    require_user,
    today_iso,
)
from .prompts import ProductForm


def parse_ingredient_option(value: str) -> tuple[str, float, str | None]:
    """Parse ``STD_ID:AMOUNT[:UNIT]``."""
    parts = value.split(":")
    if len(parts) not in (2, 3) or not parts[0]:
        raise click.BadParameter(f"Expected STD_ID:AMOUNT[:UNIT], got '{value}'")
    try:
        amount = float(parts[1])
    except ValueError:
        raise click.BadParameter(f"Invalid amount in '{value}'") from None
    unit = parts[2] if len(parts) == 3 and parts[2] else None
    return parts[0], amount, unit


@click.group()
def supplements():
    """Manage supplements and log intake."""
    pass


# ----------------------------------------------------------------------
# Ingredients
# ----------------------------------------------------------------------


@supplements.group()
def ingredients():
    """Browse the standard ingredient catalog."""
    pass


@ingredients.command("seed")
@click.pass_context
@async_command
async def seed(ctx: click.Context):
    """Populate the ingredient catalog if it is empty."""
    async with open_backend(ctx) as backend:
        count = await SupplementRepository(backend).seed_if_empty()
    if count:
        echo_success(f"Seeded {count} ingredients")
    else:
        echo_info("Ingredient catalog already populated")


def _print_ingredients(items) -> None:
    if not items:
        echo_info("No ingredients found")
        return
    rows = [[i.id, i.name, i.default_unit, i.category] for i in items]
    click.echo(format_table(["ID", "Name", "Unit", "Category"], rows))


@ingredients.command("list")
@click.option("--category", "-c", help="Only show one category")
@click.pass_context
@async_command
async def list_ingredients(ctx: click.Context, category: str | None):
    """List catalog ingredients by name."""
    async with open_backend(ctx) as backend:
        items = await SupplementRepository(backend).list_ingredients()
    if category:
        items = [i for i in items if i.category.lower() == category.lower()]
    _print_ingredients(items)


@ingredients.command("search")
@click.argument("term")
@click.pass_context
@async_command
async def search_ingredients(ctx: click.Context, term: str):
    """Search ingredients by name, id or alias."""
    async with open_backend(ctx) as backend:
        items = await SupplementRepository(backend).search_ingredients(term)
    _print_ingredients(items)


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------


@supplements.group()
def products():
    """Manage the shared product catalog."""
    pass


def _print_products(items) -> None:
    if not items:
        echo_info("No products found")
        return
    rows = [
        [p.id, p.name, p.brand or "-", str(len(p.ingredients)), f"{p.servings_per_day_default:g}"]
        for p in items
    ]
    click.echo(format_table(["ID", "Name", "Brand", "Ingredients", "Servings/day"], rows))


@products.command("list")
@click.option("--mine", is_flag=True, help="Only products you created")
@click.pass_context
@async_command
async def list_products(ctx: click.Context, mine: bool):
    """List products."""
    async with open_backend(ctx) as backend:
        repo = SupplementRepository(backend)
        if mine:
            items = await repo.products_created_by(require_user(ctx))
        else:
            items = await repo.list_products()
    _print_products(items)


@products.command("search")
@click.argument("term")
@click.pass_context
@async_command
async def search_products(ctx: click.Context, term: str):
    """Search products by name or brand."""
    async with open_backend(ctx) as backend:
        items = await SupplementRepository(backend).search_products(term)
    _print_products(items)


@products.command("add")
@click.option("--name", help="Product name (omit for interactive entry)")
@click.option("--brand", default="", help="Brand")
@click.option("--servings", type=float, default=1, show_default=True, help="Default servings per day")
@click.option(
    "--ingredient",
    "-i",
    "ingredient_specs",
    multiple=True,
    help="Ingredient line as STD_ID:AMOUNT[:UNIT] (repeatable)",
)
@click.pass_context
@async_command
async def add_product(
    ctx: click.Context,
    name: str | None,
    brand: str,
    servings: float,
    ingredient_specs: tuple[str, ...],
):
    """Add a product to the shared catalog.

    Without --name an interactive form with ingredient autocomplete is shown.
    """
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        repo = SupplementRepository(backend)
        catalog = await repo.list_ingredients()

        if name is None:
            answers = await ProductForm(catalog).collect()
            if answers is None:
                echo_warning("Cancelled")
                return
            name, brand = answers["name"], answers["brand"]
            servings = answers["servings_per_day_default"]
            specs = answers["lines"]
        else:
            specs = [parse_ingredient_option(spec) for spec in ingredient_specs]

        lines: list[IngredientLine] = []
        for std_id, amount, unit in specs:
            line = await repo.compose_ingredient_line(std_id, amount, unit, catalog=catalog)
            if isinstance(line, InvalidReference):
                echo_error(line.message)
                ctx.exit(1)
            lines.append(line)

        result = await repo.add_product(user_id, name, brand, lines, servings)

    if isinstance(result, InvalidReference):
        echo_error(result.message)
        ctx.exit(1)
    echo_success(f"Product '{name}' added (id: {result})")


@products.command("delete")
@click.argument("product_id")
@click.pass_context
@async_command
async def delete_product(ctx: click.Context, product_id: str):
    """Delete a product. Past logs keep their recorded name."""
    async with open_backend(ctx) as backend:
        await SupplementRepository(backend).delete_product(product_id)
    echo_success(f"Product {product_id} deleted")


# ----------------------------------------------------------------------
# Logs
# ----------------------------------------------------------------------


@supplements.command("log")
@click.argument("product_id")
@click.option("--date", "day", help="Day of intake (default today)")
@click.option("--servings", "-s", type=float, help="Servings taken (default: product default)")
@click.pass_context
@async_command
async def log_intake(
    ctx: click.Context, product_id: str, day: str | None, servings: float | None
):
    """Log an intake of PRODUCT_ID."""
    user_id = require_user(ctx)
    day = day or today_iso()
    async with open_backend(ctx) as backend:
        repo = SupplementRepository(backend)
        product = await repo.get_product(product_id)
        if product is None:
            echo_error(f"Product {product_id} not found")
            ctx.exit(1)
        if servings is None:
            servings = product.servings_per_day_default or 1
        log = await repo.log_supplement(
            user_id, day, product_id, servings, snapshot=product.snapshot
        )
    echo_success(f"Logged {servings:g} serving(s) of {product.name} on {day} (id: {log.id})")


def _print_logs(logs: list[SupplementLog]) -> None:
    if not logs:
        echo_info("No supplement logs")
        return
    rows = [
        [log.date, log.id, log.product_name or log.product_id, f"{log.servings_taken:g}"]
        for log in logs
    ]
    click.echo(format_table(["Date", "ID", "Product", "Servings"], rows))


@supplements.command("logs")
@click.option("--month", "year_month", help="Year-month YYYY-MM to list")
@click.option("--date", "day", help="Show a per-product summary of one day")
@click.pass_context
@async_command
async def list_logs(ctx: click.Context, year_month: str | None, day: str | None):
    """List supplement logs (default: today's summary)."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        repo = SupplementRepository(backend)
        if year_month:
            year, month = (int(part) for part in year_month.split("-"))
            _print_logs(await repo.get_supplement_logs(user_id, year, month))
            return

        day = day or today_iso()
        logs = await repo.get_day_logs(user_id, day)
        summary = daily_product_summary(logs, await repo.list_products(), day)

    if not summary:
        echo_info(f"Nothing logged on {day}")
        return
    rows = [
        [u.name, u.brand or "-", f"{u.total_servings:g}", str(u.log_count)]
        for u in summary
    ]
    click.echo(format_table(["Product", "Brand", "Servings", "Logs"], rows))


@supplements.command("unlog")
@click.argument("log_id")
@click.argument("day")
@click.pass_context
@async_command
async def unlog(ctx: click.Context, log_id: str, day: str):
    """Remove log LOG_ID recorded on DAY."""
    user_id = require_user(ctx)
    async with open_backend(ctx) as backend:
        await SupplementRepository(backend).remove_supplement_log(user_id, log_id, day)
    echo_success(f"Supplement log {log_id} removed")
