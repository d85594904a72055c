import dearpygui.dearpygui as dpg

from expedition.describe import describe_tile
from expedition.events import Event
from hexworld.geometry import axial_to_pixel, hex_corners, pixel_to_axial
from hexworld.hex import Visibility
from hexworld.pois import PoiType
from ui.palette import (
    MOVE_HIGHLIGHT,
    PLAYER_MARKER,
    SELECTED_OUTLINE,
    SETTLEMENT_GLOW,
    tile_colors,
)

MIN_ZOOM = 0.08
MAX_ZOOM = 2.2


class Camera:
    """Simple camera handling panning and zoom."""

    def __init__(self, width, height, zoom=0.35):
        self.offset_x = width // 2
        self.offset_y = height // 2
        self.zoom = zoom

    def apply(self, pos):
        x, y = pos
        return (
            x * self.zoom + self.offset_x,
            y * self.zoom + self.offset_y,
        )

    def reverse(self, pos):
        x, y = pos
        return (
            (x - self.offset_x) / self.zoom,
            (y - self.offset_y) / self.zoom,
        )

    def pan(self, dx, dy):
        self.offset_x += dx
        self.offset_y += dy

    def center_on(self, pos, screen_size):
        x, y = pos
        self.offset_x = screen_size[0] / 2 - x * self.zoom
        self.offset_y = screen_size[1] / 2 - y * self.zoom

    def change_zoom(self, factor, pivot_world):
        """Scale by ``factor`` while keeping ``pivot_world`` at the same screen position."""
        old = self.zoom
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom * factor))
        if self.zoom == old:
            return
        sx, sy = pivot_world[0] * old + self.offset_x, pivot_world[1] * old + self.offset_y
        self.offset_x = sx - pivot_world[0] * self.zoom
        self.offset_y = sy - pivot_world[1] * self.zoom


class MapView:
    """
    Draws an Expedition and forwards clicks on neighbouring tiles as moves.

    The view only reads tiles. It redraws when the session publishes an event or
    the camera changes.
    """

    def __init__(self, expedition, size=(1000, 700)):
        self.expedition = expedition
        self.map = expedition.map
        self.size = size
        self.hex_size = self.map.settings.hex_size
        self.camera = Camera(*size)
        self.camera.center_on(self.tile_center(self.map.player_tile), size)
        self.selected = None
        self._dirty = True

        # Pixel offset applied by the layout (non-zero for rectangular maps)
        lx, ly = self.map.layout.pixel((0, 0), self.hex_size)
        ax, ay = axial_to_pixel(0, 0, self.hex_size)
        self._origin = (lx - ax, ly - ay)

        expedition.events.subscribe(self._on_event)

        dpg.create_context()
        dpg.create_viewport(title="Hex Expedition", width=size[0], height=size[1])
        with dpg.window(tag="_map_window", width=size[0], height=size[1], no_move=True, no_resize=True, no_title_bar=True):
            self.canvas = dpg.add_drawlist(width=size[0], height=size[1], tag="_canvas")
        with dpg.window(tag="_info_window", label="Survey", pos=(10, 10), width=300, height=220, no_resize=True):
            dpg.add_text("", tag="_tile_name")
            dpg.add_text("", tag="_tile_desc", wrap=280)
            dpg.add_text("", tag="_tile_stats")
            dpg.add_text("", tag="_ledger")
        dpg.set_primary_window("_map_window", True)
        with dpg.handler_registry():
            dpg.add_mouse_click_handler(callback=self._on_click)
            dpg.add_mouse_drag_handler(button=dpg.mvMouseButton_Middle, callback=self._on_drag)
            dpg.add_mouse_wheel_handler(callback=self._on_scroll)
        dpg.setup_dearpygui()
        dpg.show_viewport()

    # event callbacks
    def _on_event(self, event: Event):
        self._dirty = True

    def _on_click(self, sender, app_data):
        if app_data != dpg.mvMouseButton_Left:
            return
        tile = self.tile_at_pos(dpg.get_mouse_pos())
        if tile is None:
            return
        if self.expedition.can_move_to(tile.coord):
            self.expedition.move_to(tile.coord)
        self.selected = tile.coord
        self.update_info_panel()
        self._dirty = True

    def _on_drag(self, sender, app_data):
        dx, dy = app_data[1], app_data[2]
        self.camera.pan(dx, dy)
        self._dirty = True

    def _on_scroll(self, sender, app_data):
        factor = 1.09 if app_data > 0 else 0.92
        self.camera.change_zoom(factor, self.tile_center(self.map.player_tile))
        self._dirty = True

    def tile_center(self, tile):
        return tile.x, tile.y

    def tile_at_pos(self, pos):
        x, y = self.camera.reverse(pos)
        coord = pixel_to_axial(x - self._origin[0], y - self._origin[1], self.hex_size)
        return self.map.get(coord)

    def draw_polygon(self, corners, color, fill=None, thickness=1.0):
        points = [self.camera.apply(c) for c in corners]
        points.append(points[0])
        dpg.draw_polygon(points, color=color, fill=fill or (0, 0, 0, 0), thickness=thickness, parent=self.canvas)

    def draw_map(self):
        dpg.delete_item(self.canvas, children_only=True)
        seed = self.map.seed
        for tile in self.map.tiles:
            fill, border = tile_colors(tile, seed)
            self.draw_polygon(tile.corners, border, fill)
            if tile.poi is PoiType.SETTLEMENT and tile.visibility is Visibility.EXPLORED:
                self.draw_polygon(tile.corners, SETTLEMENT_GLOW, SETTLEMENT_GLOW)

        inner = self.hex_size - self.map.settings.corner_inset
        for tile in self.expedition.reachable():
            self.draw_polygon(hex_corners(tile.x, tile.y, inner), MOVE_HIGHLIGHT, thickness=1.5)

        player = self.map.player_tile
        self.draw_polygon(hex_corners(player.x, player.y, self.hex_size + 3), PLAYER_MARKER, thickness=3)
        dpg.draw_circle(self.camera.apply((player.x, player.y)), 6 * max(self.camera.zoom, 0.5), color=PLAYER_MARKER, fill=PLAYER_MARKER, parent=self.canvas)

        if self.selected is not None:
            tile = self.map.get(self.selected)
            self.draw_polygon(hex_corners(tile.x, tile.y, inner), SELECTED_OUTLINE, thickness=2.5)

    def update_info_panel(self):
        ledger = f"Steps: {self.expedition.steps}  Travel cost: {self.expedition.travel_cost}"
        dpg.set_value("_ledger", ledger)
        if self.selected is None:
            return
        report = describe_tile(self.expedition, self.selected)
        dpg.set_value("_tile_name", report.title)
        dpg.set_value("_tile_desc", report.description)
        lines = [f"{label}: {value}" for label, value in report.stats]
        if report.hint:
            lines.append(report.hint)
        dpg.set_value("_tile_stats", "\n".join(lines))

    def run(self):
        while dpg.is_dearpygui_running():
            if self._dirty:
                self.draw_map()
                self._dirty = False
            dpg.render_dearpygui_frame()
        self.expedition.events.unsubscribe(self._on_event)
        dpg.destroy_context()
        return self.expedition.position
