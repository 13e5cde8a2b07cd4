"""
Nominal base classes for pydantic models.
"""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based configuration and domain models."""

    model_config = ConfigDict(validate_assignment=True)

    def __repr__(self) -> str:
        """Provide a concise, one-line summary of the object."""
        class_name = self.__class__.__name__
        for attr in ("name", "prompt"):
            value = getattr(self, attr, None)
            if value is not None:
                return f'<{class_name} {attr}="{value}">'
        return f"<{class_name}>"
