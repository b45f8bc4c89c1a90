from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Station(BaseModel):
    """One fuel station as reported by the upstream API.

    Prices are in upstream units (tenths of the displayed currency unit).
    `distance` arrives pre-formatted and is kept as an opaque label.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    name: str = Field(alias="Station")
    distance: str = Field(alias="Distance")
    sells_petrol: bool = Field(alias="Petrol")
    sells_diesel: bool = Field(alias="Diesel")
    petrol_price: float = Field(alias="PetrolPrice")
    diesel_price: float = Field(alias="DieselPrice")


# Validates a whole upstream response body in one pass.
STATION_LIST = TypeAdapter(list[Station])
