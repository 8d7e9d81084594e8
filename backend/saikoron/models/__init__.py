"""ORM Models — persistence shapes for the tool store."""

from saikoron.models.random_tool import RandomToolRecord

__all__ = ["RandomToolRecord"]
