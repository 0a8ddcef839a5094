"""Ingredient, product and supplement log routes."""

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response
from fastapi.responses import JSONResponse

from ...db import SupplementRepository
from ...errors import InvalidReference
from ...models.supplements import Ingredient, IngredientLine
from ..dependencies import current_user, supplement_repo

router = APIRouter(tags=["supplements"])


def invalid_reference_response(invalid: InvalidReference) -> JSONResponse:
    return JSONResponse(status_code=422, content=invalid.to_dict())


async def compose_lines(
    repo: SupplementRepository, raw_lines: list[dict], catalog: list[Ingredient]
) -> list[IngredientLine] | InvalidReference:
    """Turn request ingredient lines into checked IngredientLines."""
    lines = []
    for index, raw in enumerate(raw_lines):
        std_id = raw.get("stdId")
        amount = raw.get("amount")
        if not isinstance(std_id, str) or not isinstance(amount, (int, float)):
            raise ValueError(f"Ingredient line {index + 1} needs stdId and a numeric amount")
        line = await repo.compose_ingredient_line(
            std_id, amount, raw.get("unit"), catalog=catalog
        )
        if isinstance(line, InvalidReference):
            return InvalidReference(std_id=line.std_id, line_index=index)
        lines.append(line)
    return lines


# ----------------------------------------------------------------------
# Ingredients
# ----------------------------------------------------------------------


@router.get("/ingredients")
async def list_ingredients(repo: SupplementRepository = Depends(supplement_repo)):
    return [i.to_dict() for i in await repo.list_ingredients()]


@router.get("/ingredients/search")
async def search_ingredients(
    q: str, repo: SupplementRepository = Depends(supplement_repo)
):
    """Case-insensitive match over name, id and aliases."""
    return [i.to_dict() for i in await repo.search_ingredients(q)]


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------


def product_dict(product) -> dict:
    return {"id": product.id, **product.to_dict()}


@router.get("/products")
async def list_products(
    q: str | None = None, repo: SupplementRepository = Depends(supplement_repo)
):
    products = await repo.search_products(q) if q else await repo.list_products()
    return [product_dict(p) for p in products]


@router.get("/products/{product_id}")
async def get_product(
    product_id: str, repo: SupplementRepository = Depends(supplement_repo)
):
    product = await repo.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product_dict(product)


@router.post("/products", status_code=201)
async def add_product(
    response: Response,
    name: str = Body(...),
    brand: str = Body(""),
    ingredients: list[dict] = Body([]),
    servings_per_day_default: float = Body(1, alias="servingsPerDayDefault"),
    user_id: str | None = Depends(current_user),
    repo: SupplementRepository = Depends(supplement_repo),
):
    """Add a product; unknown ingredient std ids are rejected with 422."""
    lines = await compose_lines(repo, ingredients, await repo.list_ingredients())
    if isinstance(lines, InvalidReference):
        return invalid_reference_response(lines)

    result = await repo.add_product(user_id, name, brand, lines, servings_per_day_default)
    if isinstance(result, InvalidReference):
        return invalid_reference_response(result)
    if result is None:
        response.status_code = 200
    return {"id": result}


@router.patch("/products/{product_id}")
async def update_product(
    product_id: str,
    name: str | None = Body(None),
    brand: str | None = Body(None),
    ingredients: list[dict] | None = Body(None),
    servings_per_day_default: float | None = Body(None, alias="servingsPerDayDefault"),
    repo: SupplementRepository = Depends(supplement_repo),
):
    lines = None
    if ingredients is not None:
        lines = await compose_lines(repo, ingredients, await repo.list_ingredients())
        if isinstance(lines, InvalidReference):
            return invalid_reference_response(lines)

    invalid = await repo.update_product(
        product_id,
        name=name,
        brand=brand,
        ingredients=lines,
        servings_per_day_default=servings_per_day_default,
    )
    if invalid is not None:
        return invalid_reference_response(invalid)
    return {"status": "updated"}


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: str, repo: SupplementRepository = Depends(supplement_repo)
):
    await repo.delete_product(product_id)
    return {"status": "deleted"}


# ----------------------------------------------------------------------
# Logs
# ----------------------------------------------------------------------


@router.post("/logs", status_code=201)
async def log_supplement(
    response: Response,
    day: str = Body(..., alias="date"),
    product_id: str = Body(..., alias="productId"),
    servings: float | None = Body(None, alias="servingsTaken"),
    user_id: str | None = Depends(current_user),
    repo: SupplementRepository = Depends(supplement_repo),
):
    """Record an intake; name and brand are copied from the product."""
    product = await repo.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if servings is None:
        servings = product.servings_per_day_default or 1

    log = await repo.log_supplement(user_id, day, product_id, servings, snapshot=product.snapshot)
    if log is None:
        response.status_code = 200
    return {"log": {"id": log.id, **log.to_dict()} if log else None}


@router.get("/logs/{year}/{month}")
async def get_logs(
    year: int,
    month: int = Path(..., ge=1, le=12),
    user_id: str | None = Depends(current_user),
    repo: SupplementRepository = Depends(supplement_repo),
):
    logs = await repo.get_supplement_logs(user_id, year, month)
    return [{"id": log.id, **log.to_dict()} for log in logs]


@router.delete("/logs/{day}/{log_id}")
async def remove_log(
    day: str,
    log_id: str,
    user_id: str | None = Depends(current_user),
    repo: SupplementRepository = Depends(supplement_repo),
):
    await repo.remove_supplement_log(user_id, log_id, day)
    return {"status": "deleted"}
