"""Raporto: monthly Clockify reports as Word or Excel documents."""

from .version import VERSION

__all__ = ["VERSION"]
