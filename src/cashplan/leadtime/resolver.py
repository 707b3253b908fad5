#!/usr/bin/env python3
"""
Production Lead-Time Resolution

Resolves how many days a supplier needs to produce a SKU by walking the
override layers of the master data, most specific first:

1. Supplier x SKU override stored on the supplier record
2. Supplier <-> SKU mapping record
3. Supplier default
4. Product default

A layer only wins if its value is a positive number; zero, negative and
unparseable values fall through to the next layer.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import pandas as pd

from ..core.currency import try_parse_decimal

logger = logging.getLogger(__name__)

SOURCE_SUPPLIER_SKU = "Supplier×SKU"
SOURCE_SUPPLIER_DEFAULT = "Supplier Default"
SOURCE_PRODUCT_DEFAULT = "Product Default"
SOURCE_MISSING = "missing"


def normalize_sku(value: Any) -> str:
    """Case- and whitespace-insensitive SKU key."""
    return str(value or "").strip().lower()


def pick_lead_time(value: Any) -> Decimal | None:
    """Accept a candidate only if it is a finite number greater than zero."""
    parsed = try_parse_decimal(value)
    if parsed.ok and parsed.value > 0:
        return parsed.value
    return None


def _override_value(entry: Any) -> Any:
    # Overrides are stored either as a bare number or as a small record
    if isinstance(entry, dict):
        return entry.get("productionLeadTimeDays")
    return entry


@dataclass(frozen=True)
class SupplierOverrides:
    """
    Per-SKU overrides for one supplier.

    Overrides are keyed by whatever SKU text was typed when they were created,
    so lookups check the raw key first and the normalized key second.
    """

    raw: dict[str, Any] = field(default_factory=dict)
    normalized: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Any) -> "SupplierOverrides":
        if not isinstance(mapping, dict):
            return cls()
        raw = {str(key): _override_value(entry) for key, entry in mapping.items()}
        normalized: dict[str, Any] = {}
        for key, value in raw.items():
            normalized.setdefault(normalize_sku(key), value)
        return cls(raw=raw, normalized=normalized)

    def lookup(self, sku: Any) -> Decimal | None:
        raw_value = pick_lead_time(self.raw.get(str(sku))) if sku is not None else None
        if raw_value is not None:
            return raw_value
        return pick_lead_time(self.normalized.get(normalize_sku(sku)))


@dataclass(frozen=True)
class LeadTimeResolution:
    """Resolved lead time in days and the layer it came from."""

    value: Decimal | None
    source: str

    @property
    def found(self) -> bool:
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": float(self.value) if self.value is not None else None,
            "source": self.source,
        }


MISSING = LeadTimeResolution(value=None, source=SOURCE_MISSING)


@dataclass
class LeadTimeReference:
    """Reference collections the resolver consults."""

    suppliers: list[dict[str, Any]] = field(default_factory=list)
    products: list[dict[str, Any]] = field(default_factory=list)
    product_suppliers: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_state(cls, state: dict[str, Any] | None) -> "LeadTimeReference":
        """Pick the reference lists out of a workspace snapshot."""
        state = state or {}

        def _records(key: str) -> list[dict[str, Any]]:
            items = state.get(key) or []
            return [item for item in items if isinstance(item, dict)]

        return cls(
            suppliers=_records("suppliers"),
            products=_records("products"),
            product_suppliers=_records("productSuppliers"),
        )

    def find_supplier(self, supplier_id: Any) -> dict[str, Any] | None:
        return next((s for s in self.suppliers if s.get("id") == supplier_id), None)

    def find_product(self, sku: Any) -> dict[str, Any] | None:
        key = normalize_sku(sku)
        return next((p for p in self.products if normalize_sku(p.get("sku")) == key), None)

    def find_mapping(self, sku: Any, supplier_id: Any) -> dict[str, Any] | None:
        key = normalize_sku(sku)
        return next(
            (
                m
                for m in self.product_suppliers
                if normalize_sku(m.get("sku")) == key and m.get("supplierId") == supplier_id
            ),
            None,
        )


def resolve_lead_time(
    sku: Any, supplier_id: Any, reference: LeadTimeReference | dict[str, Any] | None
) -> LeadTimeResolution:
    """
    Resolve the production lead time for a SKU at a supplier.

    Args:
        sku: SKU as entered (matching ignores case and surrounding whitespace)
        supplier_id: Supplier id as stored on the supplier record
        reference: LeadTimeReference, or a snapshot dict with suppliers,
            products and productSuppliers lists

    Returns:
        LeadTimeResolution; source "missing" with value None when no layer applies
    """
    if not isinstance(reference, LeadTimeReference):
        reference = LeadTimeReference.from_state(reference)

    supplier = reference.find_supplier(supplier_id)

    if supplier is not None:
        overrides = SupplierOverrides.from_mapping(supplier.get("skuOverrides"))
        value = overrides.lookup(sku)
        if value is not None:
            return LeadTimeResolution(value=value, source=SOURCE_SUPPLIER_SKU)

    mapping = reference.find_mapping(sku, supplier_id)
    if mapping is not None:
        value = pick_lead_time(mapping.get("productionLeadTimeDays"))
        if value is not None:
            return LeadTimeResolution(value=value, source=SOURCE_SUPPLIER_SKU)

    if supplier is not None:
        value = pick_lead_time(supplier.get("productionLeadTimeDaysDefault"))
        if value is not None:
            return LeadTimeResolution(value=value, source=SOURCE_SUPPLIER_DEFAULT)

    product = reference.find_product(sku)
    if product is not None:
        value = pick_lead_time(product.get("productionLeadTimeDaysDefault"))
        if value is not None:
            return LeadTimeResolution(value=value, source=SOURCE_PRODUCT_DEFAULT)

    logger.debug("No lead time for sku=%r supplier=%r", sku, supplier_id)
    return MISSING


def resolve_lead_times(
    pairs: Iterable[tuple[Any, Any]], reference: LeadTimeReference
) -> pd.DataFrame:
    """
    Resolve many (sku, supplier_id) pairs into a report table.

    Returns:
        DataFrame with columns sku, supplier_id, value, source
    """
    rows = []
    for sku, supplier_id in pairs:
        resolution = resolve_lead_time(sku, supplier_id, reference)
        rows.append(
            {
                "sku": sku,
                "supplier_id": supplier_id,
                "value": float(resolution.value) if resolution.value is not None else None,
                "source": resolution.source,
            }
        )
    return pd.DataFrame(rows, columns=["sku", "supplier_id", "value", "source"])
