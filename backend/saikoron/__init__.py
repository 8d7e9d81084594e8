"""Saikoron — weighted list and numeric range draw engine with a REST shell."""

__version__ = "1.0.0"
