"""Order information consumed by the checkout flow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderInfo:
    first_name: str
    last_name: str
    zip_code: str


ORDER_DATA = OrderInfo(first_name="John", last_name="Doe", zip_code="12345")
