import math
import re

_HEX_RE = re.compile(r"[0-9a-fA-F]{6}")

DEFAULT_DISPLAY_COLOR = "#ffffff"


def hex_to_rgb(hex_color):
    if not isinstance(hex_color, str):
        return None
    hex_color = hex_color[1:] if hex_color.startswith("#") else hex_color
    if not _HEX_RE.fullmatch(hex_color):
        return None

    return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(r, g, b):
    return "#" + "".join(f"{max(0, min(255, math.floor(c + 0.5))):02x}" for c in (r, g, b))


def hex_to_cloud_color(hex_color):
    # LIFX accepts "#rrggbb" directly
    return hex_color if hex_color.startswith("#") else f"#{hex_color}"


def hue_sat_to_hex(hue, saturation, lightness=0.5):
    c = (1 - abs(2 * lightness - 1)) * saturation
    x = c * (1 - abs((hue / 60) % 2 - 1))
    m = lightness - c / 2

    if 0 <= hue < 60:
        r, g, b = c, x, 0
    elif 60 <= hue < 120:
        r, g, b = x, c, 0
    elif 120 <= hue < 180:
        r, g, b = 0, c, x
    elif 180 <= hue < 240:
        r, g, b = 0, x, c
    elif 240 <= hue < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return rgb_to_hex((r + m) * 255, (g + m) * 255, (b + m) * 255)


def device_color_hex(device):
    """Display color for a device as reported by the cloud API."""
    color = device.get("color")
    if not color:
        return DEFAULT_DISPLAY_COLOR
    if color.get("hex"):
        return color["hex"]
    return hue_sat_to_hex(color.get("hue", 0), color.get("saturation", 0))
