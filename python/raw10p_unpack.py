#!/usr/bin/env python3

"""raw10p_unpack.py module description.

Unpacks 10-bit packed (4-in-5) scan lines into 8-bit samples.
"""


import sys

import raw10p_common


# 10-bit Bayer formats (packed) aka 4-in-5
#   +---+---+---+---+---+---+---+---+ +---+---+---+---+---+---+---+---+
#   |A9 |A8 |A7 |A6 |A5 |A4 |A3 |A2 | |B9 |B8 |B7 |B6 |B5 |B4 |B3 |B2 |
#   +---+---+---+---+---+---+---+---+ +---+---+---+---+---+---+---+---+
#   |C9 |C8 |C7 |C6 |C5 |C4 |C3 |C2 | |D9 |D8 |D7 |D6 |D5 |D4 |D3 |D2 |
#   +---+---+---+---+---+---+---+---+ +---+---+---+---+---+---+---+---+
#   |D1 |D0 |C1 |C0 |B1 |B0 |A1 |A0 |
#   +---+---+---+---+---+---+---+---+
# Converting to 8 bits keeps the first 4 bytes, and drops the 5th one
# (truncation, not rounding).
BLEN = 5
CLEN = 4


def get_line_span(sample_count):
    # bytes of a packed line read when unpacking sample_count components.
    # The LSB byte of the last item is never read
    if sample_count <= 0:
        return 0
    items, remainder = divmod(sample_count - 1, CLEN)
    return items * BLEN + remainder + 1


def unpack_line(buffer, sample_count, logfd=sys.stdout, debug=0):
    """Unpack a 10-bit packed line into 8-bit samples, in place.

    After the call, buffer[0:sample_count] contains the 8-bit samples in
    the original order. The rest of the buffer is garbage.

    Args:
        buffer: bytearray containing one packed line (line_len bytes)
        sample_count: number of components (pixels) in the line
        logfd: log file descriptor
        debug: debug level

    Raises:
        LineTooShort: buffer does not contain sample_count components
    """
    if get_line_span(sample_count) > len(buffer):
        raise raw10p_common.LineTooShort(
            f"line_len ({len(buffer)}) cannot hold {sample_count} packed samples"
        )
    # item 0 is already in place. dst always lags src, so a low-to-high
    # walk only overwrites bytes that were already consumed
    src = BLEN
    dst = CLEN
    while dst < sample_count:
        size = min(CLEN, sample_count - dst)
        buffer[dst : dst + size] = buffer[src : src + size]
        if debug > 2:
            print(f"debug: unpack {src=} {dst=} {size=}", file=logfd)
        src += BLEN
        dst += CLEN
    return buffer
