"""
Lead-Time Package

Resolution of production lead times across the supplier/product override
layers of the master data.
"""

from .resolver import (
    SOURCE_MISSING,
    SOURCE_PRODUCT_DEFAULT,
    SOURCE_SUPPLIER_DEFAULT,
    SOURCE_SUPPLIER_SKU,
    LeadTimeReference,
    LeadTimeResolution,
    SupplierOverrides,
    normalize_sku,
    resolve_lead_time,
    resolve_lead_times,
)

__all__ = [
    "SOURCE_MISSING",
    "SOURCE_PRODUCT_DEFAULT",
    "SOURCE_SUPPLIER_DEFAULT",
    "SOURCE_SUPPLIER_SKU",
    "LeadTimeReference",
    "LeadTimeResolution",
    "SupplierOverrides",
    "normalize_sku",
    "resolve_lead_time",
    "resolve_lead_times",
]
