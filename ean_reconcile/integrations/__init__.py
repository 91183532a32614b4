# ean_reconcile/integrations/__init__.py

from ean_reconcile.integrations import sheet
from ean_reconcile.integrations import document
from ean_reconcile.integrations import validation

__all__ = ["sheet", "document", "validation"]
