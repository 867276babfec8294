# SPDX-License-Identifier: MIT

import random
import re

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

# Shown for days outside the displayed month and for unknown track types
MUTED_COLOR = "bright_black"
TODAY_COLOR = "bold dark_orange"


def get_random_color() -> str:
    """Return a random hex color that reads well as a badge on light and dark terminals."""
    colors = [
        "#ef4444",
        "#f97316",
        "#eab308",
        "#22c55e",
        "#14b8a6",
        "#06b6d4",
        "#3b82f6",
        "#6366f1",
        "#8b5cf6",
        "#d946ef",
        "#ec4899",
        "#64748b",
    ]
    return random.choice(colors)


def is_hex_color(value: str) -> bool:
    return HEX_COLOR_PATTERN.match(value) is not None
