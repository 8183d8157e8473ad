"""
Catalog helpers: part import rows and the default seed catalog.

Import rows arrive already parsed into dictionaries; reading file formats
is left to the caller. Column names are matched through an explicit alias
table, first match wins.
"""

from dataclasses import dataclass
from typing import Any

from src.config import get_logger
from src.core.entities.part import Part
from src.core.entities.pricing import PricingType
from src.core.exceptions import ValidationError
from src.core.services.pricing import PricingCalculator

logger = get_logger(__name__)

DEFAULT_IMAGE_URL = "https://placehold.co/600x400"


@dataclass(frozen=True)
class PartImportColumns:
    """Recognised column names per field, in priority order."""

    part_number: tuple[str, ...] = ("Part Number", "PartNumber", "partNumber")
    name: tuple[str, ...] = ("Description", "Name", "name")
    stock: tuple[str, ...] = ("Quantity", "Stock", "stock")
    price: tuple[str, ...] = ("Price", "price")
    taxable: tuple[str, ...] = ("Taxable", "taxable")
    part_code: tuple[str, ...] = ("Part Code", "PartCode", "partCode")
    brand: tuple[str, ...] = ("Brand", "brand")
    category: tuple[str, ...] = ("Category", "category")
    equipment_model: tuple[str, ...] = ("Equipment Model", "EquipmentModel", "equipmentModel")
    image_url: tuple[str, ...] = ("Image URL", "ImageURL", "imageUrl")


def pick(row: dict[str, Any], aliases: tuple[str, ...], default: str = "") -> str:
    """First non-empty value among ``aliases``."""
    for key in aliases:
        value = row.get(key)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return default


def _parse_int(raw: str) -> int:
    try:
        return int(float(raw))
    except ValueError:
        return 0


def _parse_float(raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        return 0.0


def part_from_row(
    row: dict[str, Any],
    calculator: PricingCalculator,
    columns: PartImportColumns | None = None,
) -> Part | None:
    """
    Build a part from an import row.

    Returns None when the row has no part number or no name. Prices are
    read as tax-exclusive base prices. Negative stock or price is clamped
    to zero.
    """
    columns = columns or PartImportColumns()
    part_number = pick(row, columns.part_number)
    name = pick(row, columns.name)
    if not part_number or not name:
        return None

    price = max(_parse_float(pick(row, columns.price, "0")), 0.0)
    taxable = pick(row, columns.taxable, "true").lower() == "true"
    base, tax = calculator.decompose(price, taxable, PricingType.EXCLUSIVE)
    return Part(
        name=name,
        part_number=part_number,
        part_code=pick(row, columns.part_code, part_number),
        description=name,
        brand=pick(row, columns.brand),
        category=pick(row, columns.category),
        equipment_model=pick(row, columns.equipment_model),
        image_url=pick(row, columns.image_url, DEFAULT_IMAGE_URL),
        price=base,
        tax=tax,
        taxable=taxable,
        pricing_type=PricingType.EXCLUSIVE,
        stock=max(_parse_int(pick(row, columns.stock, "0")), 0),
    )


def validate_part_fields(name: str, part_number: str, part_code: str, amount: float, stock: int) -> None:
    """Catalog entry checks. Raises ValidationError."""
    if not name or not name.strip():
        raise ValidationError("name", "Part name is required")
    if not part_number or not part_number.strip():
        raise ValidationError("part_number", "Part number is required")
    if not part_code or not part_code.strip():
        raise ValidationError("part_code", "Part code is required")
    if amount < 0:
        raise ValidationError("price", "Price must be a positive number", amount)
    if stock < 0:
        raise ValidationError("stock", "Stock cannot be negative", stock)


# Default catalog loaded once into an empty installation
DEFAULT_CATALOG: list[dict[str, Any]] = [
    {
        "name": "Heavy-Duty Alternator",
        "part_number": "HD-ALT-001",
        "part_code": "P001",
        "price": 299.99,
        "stock": 15,
        "brand": "PowerMax",
        "category": "Electrical",
        "equipment_model": "TruckMaster 5000",
        "taxable": True,
    },
    {
        "name": "Engine Air Filter",
        "part_number": "EAF-002",
        "part_code": "P002",
        "price": 45.50,
        "stock": 48,
        "brand": "CleanFlow",
        "category": "Filters",
        "equipment_model": "EarthMover 300",
        "taxable": True,
    },
    {
        "name": "Hydraulic Pump",
        "part_number": "HYD-PMP-003",
        "part_code": "P003",
        "price": 850.00,
        "stock": 8,
        "brand": "HydroGear",
        "category": "Hydraulics",
        "equipment_model": "Excavator X10",
        "taxable": True,
    },
    {
        "name": "Brake Pad Set",
        "part_number": "BRK-PAD-004",
        "part_code": "P004",
        "price": 120.75,
        "stock": 32,
        "brand": "StopWell",
        "category": "Brakes",
        "equipment_model": "Loader Pro 900",
        "taxable": True,
    },
    {
        "name": "Turbocharger",
        "part_number": "TRB-CHR-005",
        "part_code": "P005",
        "price": 1250.00,
        "stock": 5,
        "brand": "BoostUp",
        "category": "Engine",
        "equipment_model": "Dozer D5",
        "taxable": False,
    },
    {
        "name": "Fuel Injector",
        "part_number": "FUL-INJ-006",
        "part_code": "P006",
        "price": 350.00,
        "stock": 25,
        "brand": "DieselPro",
        "category": "Fuel System",
        "equipment_model": "TruckMaster 5000",
        "taxable": True,
    },
]


def default_catalog(calculator: PricingCalculator) -> list[Part]:
    """Seed parts priced at the current tax rate."""
    parts = []
    for entry in DEFAULT_CATALOG:
        part = Part(
            **entry,
            description=entry["name"],
            image_url=DEFAULT_IMAGE_URL,
            pricing_type=PricingType.EXCLUSIVE,
        )
        parts.append(calculator.reprice(part))
    return parts
