#!/usr/bin/env python3

"""raw10p_visualize.py module description.

Writes the original Bayer layout of a 10-bit packed frame as an RGB (P6)
pnm file. Every pixel keeps only its own component (R, G, or B), and the
other 2 components are set to zero. No demosaicing is done.
"""


import numpy as np
import sys

import raw10p_common
import raw10p_normalize
import raw10p_unpack


# rgb component index
R_INDEX = 0
G_INDEX = 1
B_INDEX = 2

# component index for each (row % 2, col % 2) position
RGGB_INDEXES = ((R_INDEX, G_INDEX), (G_INDEX, B_INDEX))
GRBG_INDEXES = ((G_INDEX, R_INDEX), (B_INDEX, G_INDEX))
GBRG_INDEXES = ((G_INDEX, B_INDEX), (R_INDEX, G_INDEX))
BGGR_INDEXES = ((B_INDEX, G_INDEX), (G_INDEX, R_INDEX))

PNM_MAXVAL = 255


def get_channel_indexes(phase):
    if phase == raw10p_common.BayerPhase.red_green:
        return RGGB_INDEXES
    elif phase == raw10p_common.BayerPhase.green_red:
        return GRBG_INDEXES
    elif phase == raw10p_common.BayerPhase.green_blue:
        return GBRG_INDEXES
    elif phase == raw10p_common.BayerPhase.blue_green:
        return BGGR_INDEXES
    raise AssertionError(f"error: invalid Bayer phase: {phase}")


def get_header(width, height):
    return f"P6\n{width} {height}\n{PNM_MAXVAL}\n".encode("ascii")


def visualize(fin, fout, geometry, phase, logfd=sys.stdout, debug=0):
    """Write a packed Bayer frame as an RGB pnm image (full size).

    Args:
        fin: binary input stream, positioned at the start of the frame
        fout: binary output stream
        geometry: FrameGeometry of the input frame
        phase: BayerPhase of the input frame
        logfd: log file descriptor
        debug: debug level
    """
    width = geometry.width
    indexes = np.array(get_channel_indexes(phase), dtype=np.intp)
    if debug > 0:
        print(f"debug: visualize {geometry} {phase.name} {indexes.tolist()}", file=logfd)

    raw10p_normalize.write_data(fout, get_header(width, geometry.height))
    buffer = bytearray(geometry.line_len)
    cols = np.arange(width)
    pixels = np.zeros((width, 3), dtype=np.uint8)
    for row in range(geometry.height):
        raw10p_normalize.read_line(fin, buffer)
        raw10p_unpack.unpack_line(buffer, width, logfd, debug)
        samples = np.frombuffer(bytes(buffer[:width]), dtype=np.uint8)
        pixels.fill(0)
        pixels[cols, indexes[row % 2][cols % 2]] = samples
        raw10p_normalize.write_data(fout, pixels.tobytes())
        if debug > 1:
            print(f"debug: {row=} written {width} pixels", file=logfd)
