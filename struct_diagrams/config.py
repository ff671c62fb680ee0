# struct_diagrams/config.py
"""
Diagram layout configuration and defaults.

Every constant the engine uses to size frames, bound scales and decide
what counts as a "non-zero" response lives here. Callers that need other
values build a variant with ``dataclasses.replace(CONFIG, ...)``.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DiagramConfig:
    """Global diagram configuration."""

    # Per-frame canvas geometry (CSS pixels)
    frame_width: float = 1200.0
    frame_height: float = 900.0
    frame_padding: float = 40.0
    header_height: float = 80.0
    margin: float = 40.0
    pixel_ratio: float = 1.0

    # Sampling
    divisions: int = 20
    coord_tolerance: float = 0.01

    # Base geometric scale: fraction of the drawable area filled by the model
    fill_fraction: float = 0.9

    # Displacement scale solver
    disp_target_fraction: float = 0.05
    disp_scale_max: float = 100000.0
    disp_fallback_scale: float = 1000.0
    disp_frame_safety: float = 0.98
    length_to_mm: float = 1000.0

    # Stress / ratio pixel-scale solver
    stress_pixel_fraction: float = 0.06
    ratio_pixel_fraction: float = 0.08
    pixel_scale_safety: float = 0.95

    # "Non-zero response" thresholds used by the plane grouper
    disp_threshold_mm: float = 0.01
    stress_threshold: float = 0.001
    ratio_threshold: float = 0.001

    # Labels
    value_label_threshold: float = 0.01
    node_disp_label_threshold_mm: float = 0.1
    title_font_size: float = 20.0
    subtitle_font_size: float = 16.0
    number_font_size: float = 13.0
    value_font_size: float = 18.0
    peak_font_size: float = 16.0
    node_marker_radius: float = 6.0
    label_padding: float = 8.0
    value_label_padding: float = 14.0
    peak_label_padding: float = 16.0

    @property
    def draw_width(self) -> float:
        return self.frame_width - 2 * self.margin

    @property
    def draw_height(self) -> float:
        return self.frame_height - 2 * self.margin

    def canvas_size(self, n_frames: int) -> Tuple[float, float]:
        """Canvas size (CSS pixels) for ``n_frames`` laid out side by side."""
        width = n_frames * (self.frame_width + self.frame_padding) + self.frame_padding
        height = self.frame_height + self.header_height + self.frame_padding * 2
        return width, height

    def frame_origin(self, index: int) -> Tuple[float, float]:
        """Top-left corner of frame ``index`` on the canvas."""
        x = self.frame_padding + index * (self.frame_width + self.frame_padding)
        y = self.header_height + self.frame_padding
        return x, y


# Global config instance
CONFIG = DiagramConfig()
