"""Map storage."""

from dcc_character_sheet.config import MAPS_DIRNAME
from dcc_character_sheet.models.game_map import DEFAULT_GRID_COLOR, GameMap
from dcc_character_sheet.storage.base import JsonRecordStore


class MapStore(JsonRecordStore[GameMap]):
    """Battle maps, stored whole. No history is kept."""

    kind = "map"
    dirname = MAPS_DIRNAME
    model = GameMap

    def create(self, name: str, grid_width: int, grid_height: int, grid_size: int) -> GameMap:
        """Create and save an empty, active map with the grid shown."""
        game_map = GameMap(
            id=f"map-{int(self.clock().timestamp())}",
            name=name,
            grid_width=grid_width,
            grid_height=grid_height,
            grid_size=grid_size,
            grid_color=DEFAULT_GRID_COLOR,
            show_grid=True,
            is_active=True,
        )
        return self.save(game_map)

    def clear(self, map_id: str) -> GameMap:
        """Wipe drawings and icons but keep the map and its grid settings."""
        with self._locked(map_id):
            game_map = self.get(map_id)
            game_map.strokes = {}
            game_map.icons = []
            return self.save(game_map)
