#!/usr/bin/env python3

"""raw10p_normalize.py module description.

Converts a 10-bit packed Bayer frame into an 8-bit GRBG Bayer frame.

The 4 Bayer phases are made GRBG by dropping border rows and/or columns:
* RGGB: drop the first and last column (width -= 2)
* GRBG: nothing to do
* GBRG: drop the first and last row and column (width -= 2, height -= 2)
* BGGR: drop the first and last row (height -= 2)
"""


import sys

import raw10p_common
import raw10p_unpack


def read_line(fin, buffer):
    size = fin.readinto(buffer)
    if size is None or size < len(buffer):
        raise raw10p_common.ShortRead(
            f"read error: expected {len(buffer)} bytes, got {size or 0}"
        )


def write_data(fout, data):
    try:
        size = fout.write(data)
    except OSError as e:
        raise raw10p_common.WriteFailure(f"write error: {e}") from e
    if size is not None and size != len(data):
        raise raw10p_common.WriteFailure(
            f"write error: expected {len(data)} bytes, wrote {size}"
        )


def convert(fin, fout, geometry, phase, logfd=sys.stdout, debug=0):
    """Write a packed Bayer frame as an 8-bit GRBG frame.

    Args:
        fin: binary input stream, positioned at the start of the frame
        fout: binary output stream
        geometry: FrameGeometry of the input frame
        phase: BayerPhase of the input frame
        logfd: log file descriptor
        debug: debug level

    Returns:
        (width, height) tuple of the output frame
    """
    trim = phase.get_trim()
    o_width, o_height = trim.get_output_size(geometry.width, geometry.height)
    if debug > 0:
        print(
            f"debug: convert {geometry} {phase.name} -> {o_width}x{o_height} {trim}",
            file=logfd,
        )

    buffer = bytearray(geometry.line_len)
    # drop the first line
    if trim.top:
        read_line(fin, buffer)
    # the last line (if trimmed) is never read
    for row in range(o_height):
        read_line(fin, buffer)
        # unpack the full line before dropping columns
        raw10p_unpack.unpack_line(buffer, geometry.width, logfd, debug)
        write_data(fout, buffer[trim.left : trim.left + o_width])
        if debug > 1:
            print(f"debug: {row=} written {o_width} bytes", file=logfd)
    return o_width, o_height
