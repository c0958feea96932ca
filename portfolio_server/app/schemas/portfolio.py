"""
Pydantic schemas for portfolio items.

Python code uses the descriptive field names ``price`` and
``image_ref``; the JSON representation (API responses and the seed
file) uses the short names ``prix`` and ``img`` that the site's
front end reads.  Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, Field


class PortfolioItemBase(BaseModel):
    """Fields shared by all portfolio item schemas."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Title shown on the portfolio card")
    category: str = Field("", description="Free-form category used by the site filters")
    price: float = Field(0.0, alias="prix", description="Price; 0 when unknown")
    image_ref: str = Field(..., alias="img", description="URL path of the item's image")


class PortfolioItemCreate(PortfolioItemBase):
    """Schema for creating a new portfolio item.

    There is no ``id`` field: identifiers are always assigned by the
    store.
    """


class PortfolioItemRead(PortfolioItemBase):
    """Schema for reading a stored portfolio item."""

    id: int
