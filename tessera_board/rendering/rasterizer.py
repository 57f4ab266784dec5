"""
Blueprint Rasterizer
====================

Pure rendering layer: paints a RasterDescription onto an image.

Design:
- Stateless rendering (one call per description)
- No layout logic; commands are painted in order
- Uses supervision drawing utilities on a BGR numpy canvas
- OpenCV Hershey fonts only cover ASCII: other glyphs are substituted
  (use RasterDescription.to_svg() for full text)

Dependencies:
- supervision (draw utilities, Color, Point)
- opencv (text metrics, PNG encoding)
- numpy (canvas)
"""

import cv2
import numpy as np
import supervision as sv

from tessera_board.blueprint import (
    LineCommand,
    PathCommand,
    RasterDescription,
    RectCommand,
    TextAnchor,
    TextCommand,
)
from tessera_board.logging import LogEvent, create_logger

logger = create_logger("rasterizer")

# Cap height of Hershey glyphs relative to the nominal font size
_CAP_HEIGHT_RATIO = 0.7

_ASCII_SUBSTITUTES = {"×": "x", "–": "-", "—": "-", "°": " deg"}


def to_ascii(text: str) -> str:
    for char, substitute in _ASCII_SUBSTITUTES.items():
        text = text.replace(char, substitute)
    return text.encode("ascii", "replace").decode("ascii")


class BlueprintRasterizer:
    """
    Render blueprint descriptions to images.

    Usage:
        rasterizer = BlueprintRasterizer()
        image = rasterizer.render(description)      # HxWx3 uint8 (BGR)
        png = rasterizer.encode_png(description)    # bytes
    """

    def __init__(
        self,
        text_font: int = cv2.FONT_HERSHEY_SIMPLEX,
        text_thickness: int = 1,
    ):
        """
        Args:
            text_font: OpenCV font face
            text_thickness: Stroke thickness for text
        """
        self.text_font = text_font
        self.text_thickness = text_thickness

    def render(self, description: RasterDescription) -> np.ndarray:
        """
        Paint every command of the description.

        Returns:
            BGR image of shape (height_px, width_px, 3)
        """
        frame = np.zeros((description.height_px, description.width_px, 3), dtype=np.uint8)

        for command in description.commands:
            if isinstance(command, RectCommand):
                frame = self._draw_rect(frame, command)
            elif isinstance(command, LineCommand):
                frame = sv.draw_line(
                    scene=frame,
                    start=sv.Point(x=int(round(command.x1)), y=int(round(command.y1))),
                    end=sv.Point(x=int(round(command.x2)), y=int(round(command.y2))),
                    color=sv.Color.from_hex(command.stroke),
                    thickness=self._thickness(command.stroke_width),
                )
            elif isinstance(command, PathCommand):
                frame = self._draw_path(frame, command)
            elif isinstance(command, TextCommand):
                frame = self._draw_text(frame, command)
            else:
                raise TypeError(f"Unsupported draw command: {type(command).__name__}")

        logger.info(
            event=LogEvent.BLUEPRINT_RENDERED,
            message=f"Rendered blueprint {description.width_px}x{description.height_px}px",
            metadata={'commands': len(description.commands)},
        )
        return frame

    def encode_png(self, description: RasterDescription) -> bytes:
        ok, buffer = cv2.imencode(".png", self.render(description))
        if not ok:
            raise RuntimeError("PNG encoding failed")
        return buffer.tobytes()

    @staticmethod
    def _thickness(stroke_width: float) -> int:
        return max(1, int(round(stroke_width)))

    @staticmethod
    def _draw_rect(frame: np.ndarray, command: RectCommand) -> np.ndarray:
        x0, y0 = max(0, int(round(command.x))), max(0, int(round(command.y)))
        x1 = int(round(command.x + command.width))
        y1 = int(round(command.y + command.height))
        frame[y0:y1, x0:x1] = sv.Color.from_hex(command.fill).as_bgr()
        return frame

    def _draw_path(self, frame: np.ndarray, command: PathCommand) -> np.ndarray:
        polygon = np.round(np.asarray(command.points, dtype=np.float64)).astype(np.int32)
        if command.fill:
            frame = sv.draw_filled_polygon(
                scene=frame,
                polygon=polygon,
                color=sv.Color.from_hex(command.fill),
            )
        return sv.draw_polygon(
            scene=frame,
            polygon=polygon,
            color=sv.Color.from_hex(command.stroke),
            thickness=self._thickness(command.stroke_width),
        )

    def _draw_text(self, frame: np.ndarray, command: TextCommand) -> np.ndarray:
        text = to_ascii(command.text)
        scale = cv2.getFontScaleFromHeight(
            self.text_font,
            max(1, int(round(command.font_size * _CAP_HEIGHT_RATIO))),
            self.text_thickness,
        )
        (text_w, _), _ = cv2.getTextSize(text, self.text_font, scale, self.text_thickness)

        # sv.draw_text centers the text on its anchor
        center_x = command.x if command.anchor is TextAnchor.MIDDLE else command.x + text_w / 2.0
        return sv.draw_text(
            scene=frame,
            text=text,
            text_anchor=sv.Point(x=int(round(center_x)), y=int(round(command.y))),
            text_color=sv.Color.from_hex(command.fill),
            text_scale=scale,
            text_thickness=self.text_thickness,
            text_padding=0,
            text_font=self.text_font,
        )
