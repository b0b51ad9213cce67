#!/usr/bin/env python3

"""Supported input formats: 10-bit packed Bayer (MIPI RAW10).

All 4 formats pack 4 components in 5 bytes, and differ only in the Bayer
phase of the first pixel.
"""


import raw10p_common


# 10-bit Bayer formats (packed)
BAYER_FORMATS = {
    "pRAA": {
        "alias": ("SRGGB10P", "MIPI-RAW10-RGGB"),
        "name": "SRGGB10P (RGRG... GBGB... ; 'pRAA')",
        "phase": raw10p_common.BayerPhase.red_green,
    },
    "pgAA": {
        "alias": ("SGRBG10P", "MIPI-RAW10-GRBG"),
        "name": "SGRBG10P (GRGR... BGBG... ; 'pgAA')",
        "phase": raw10p_common.BayerPhase.green_red,
    },
    "pGAA": {
        "alias": ("SGBRG10P", "MIPI-RAW10-GBRG"),
        "name": "SGBRG10P (GBGB... RGRG... ; 'pGAA')",
        "phase": raw10p_common.BayerPhase.green_blue,
    },
    "pBAA": {
        "alias": ("SBGGR10P", "MIPI-RAW10-BGGR"),
        "name": "SBGGR10P (BGBG... GRGR... ; 'pBAA')",
        "phase": raw10p_common.BayerPhase.blue_green,
    },
}

DEFAULT_PIX_FMT = "pBAA"

INPUT_CANONICAL_LIST = list(BAYER_FORMATS.keys())
INPUT_ALIAS_LIST = list(
    alias for v in BAYER_FORMATS.values() if "alias" in v for alias in v["alias"]
)
I_PIX_FMT_LIST = INPUT_CANONICAL_LIST + INPUT_ALIAS_LIST


def get_canonical_input_pix_fmt(i_pix_fmt):
    # convert input pixel format to the canonical name
    if i_pix_fmt in INPUT_CANONICAL_LIST:
        return i_pix_fmt
    elif i_pix_fmt in INPUT_ALIAS_LIST:
        # find the canonical name
        for canonical, v in BAYER_FORMATS.items():
            if i_pix_fmt in v.get("alias", []):
                return canonical
    raise raw10p_common.UnknownFormat(f"unknown input pix_fmt: {i_pix_fmt}")


def lookup(i_pix_fmt):
    """Get the Bayer phase and display name of an input pixel format.

    Args:
        i_pix_fmt: canonical name (fourcc) or alias (V4L2/MIPI name)

    Returns:
        (BayerPhase, str) tuple

    Raises:
        UnknownFormat: i_pix_fmt is not a 10-bit packed Bayer format
    """
    pix_fmt = get_canonical_input_pix_fmt(i_pix_fmt)
    return BAYER_FORMATS[pix_fmt]["phase"], BAYER_FORMATS[pix_fmt]["name"]


def list_all():
    return list(v["name"] for v in BAYER_FORMATS.values())


# "SRGGB10P (RGRG... GBGB... ; 'pRAA')" -> "SRGGB10P"
def get_short_name(name):
    return name.split(" ", 1)[0]
