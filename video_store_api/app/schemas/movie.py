"""
Pydantic models for movie data.

``MovieBase`` holds the catalog fields shared by stored movies and
external search results.  ``Movie`` is the stored record including the
shelf ``inventory``; ``MovieDetail`` adds the computed
``available_inventory`` for the detail endpoint.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MovieBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Alien"])
    external_id: Optional[int] = Field(None, examples=[348])
    overview: Optional[str] = None
    release_date: Optional[str] = Field(None, examples=["1979-05-25"])
    image_url: Optional[str] = None


class MovieCreate(MovieBase):
    """Schema for creating a movie manually or from a catalog import.

    ``title`` may be omitted here so that the service can report it
    alongside any other problem with the record.
    """

    title: Optional[str] = Field(None, examples=["Alien"])
    inventory: int = Field(0, ge=0)


class Movie(MovieBase):
    """Stored movie record."""

    id: int
    inventory: int = Field(0, ge=0)

    model_config = {
        "from_attributes": True,
    }


class MovieCreated(BaseModel):
    id: int
    title: str
    external_id: Optional[int] = None


class MovieDetail(BaseModel):
    title: str
    overview: Optional[str] = None
    release_date: Optional[str] = None
    inventory: int
    available_inventory: int


class MovieInventoryUpdate(BaseModel):
    """Administrative change of the number of copies on the shelf."""

    inventory: int = Field(..., ge=0)
