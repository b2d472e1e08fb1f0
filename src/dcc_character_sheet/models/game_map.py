"""Map models. Canvas contents are opaque to storage."""

from typing import Any, Optional

from pydantic import Field, field_validator, model_serializer

from dcc_character_sheet.models.base import SheetModel, SoftDeletable, none_as_empty_list

DEFAULT_GRID_COLOR = "#cccccc"


class MapIcon(SheetModel):
    """An icon placed on a map."""

    id: str
    filename: str = ""
    category: str = ""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    is_active: bool = False


class MapBackground(SheetModel):
    """A background image drawn under the grid."""

    filename: str = ""
    opacity: float = 0.0
    scale: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0


class GameMap(SoftDeletable):
    """A gridded battle map with its drawing layer and placed icons."""

    name: str = ""
    grid_width: int = 0
    grid_height: int = 0
    grid_size: int = 0
    grid_color: str = DEFAULT_GRID_COLOR
    show_grid: bool = False
    strokes: Any = Field(default_factory=dict)  # drawing layer JSON
    icons: list[MapIcon] = Field(default_factory=list)
    background: Optional[MapBackground] = None

    @field_validator("icons", mode="before")
    @classmethod
    def null_icons(cls, value):
        return none_as_empty_list(value)

    @model_serializer(mode="wrap")
    def omit_missing_background(self, handler):
        data = handler(self)
        if data.get("background") is None:
            data.pop("background", None)
        return data
