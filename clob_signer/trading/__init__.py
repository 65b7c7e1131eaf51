"""Order construction and signing."""

from .order_builder import OrderBuilder, compute_amounts, generate_salt

__all__ = ["OrderBuilder", "compute_amounts", "generate_salt"]
