"""
Options Serializer
Turns TransformOptions into the canonical options path of a Thumbor URL
"""

from typing import List

from thumbor_url.schemas.options import (
    FitIn,
    HorizontalAlign,
    Rect,
    TransformOptions,
    VerticalAlign,
)


def format_size(width: float, height: float) -> str:
    return f"{int(width)}x{int(height)}"


def format_rect(rect: Rect) -> str:
    return "{}x{}:{}x{}".format(
        int(rect.x),
        int(rect.y),
        int(rect.x + rect.width),
        int(rect.y + rect.height),
    )


def url_options(options: TransformOptions) -> List[str]:
    """Serialize options into ordered path segments.

    The segment order is fixed by the URL scheme and must not change,
    since the signature is computed over the joined path.

    Args:
        options: Transformation options to serialize

    Returns:
        List of path segments, empty for default options
    """
    params = []

    if options.debug:
        params.append("debug")

    if options.meta:
        params.append("meta")

    if not options.crop.is_zero:
        params.append(format_rect(options.crop))

    if options.fit_in == FitIn.ADAPTIVE:
        params.append("adaptive-fit-in")
    elif options.fit_in == FitIn.NORMAL:
        params.append("fit-in")

    width = options.target_size.width * options.scale
    height = options.target_size.height * options.scale
    if options.hflip:
        width *= -1
    if options.vflip:
        height *= -1

    if width != 0 or height != 0:
        params.append(format_size(width, height))

    if options.halign == HorizontalAlign.LEFT:
        params.append("left")
    elif options.halign == HorizontalAlign.RIGHT:
        params.append("right")

    if options.valign == VerticalAlign.TOP:
        params.append("top")
    elif options.valign == VerticalAlign.BOTTOM:
        params.append("bottom")

    if options.smart:
        params.append("smart")

    if options.filters:
        filter_strings = ["filters"]
        filter_strings.extend(f.render() for f in options.filters)
        params.append(":".join(filter_strings))

    return params


def url_options_path(options: TransformOptions) -> str:
    """Join the serialized segments into the options path."""
    return "/".join(url_options(options))
