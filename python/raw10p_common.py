#!/usr/bin/env python3

"""raw10p_common.py module description.


Module that contains common code: Bayer phases, trim vectors, frame
geometry, and the conversion errors.
"""


import enum


class ConversionError(Exception):
    """Conversion issue."""


class UnknownFormat(ConversionError):
    """Unsupported input pixel format."""


class InvalidGeometry(ConversionError):
    """Frame size does not fit the input file."""


class LineTooShort(ConversionError):
    """Scan line cannot hold the requested samples."""


class ShortRead(ConversionError):
    """Input ended before a full scan line."""


class WriteFailure(ConversionError):
    """Output did not accept the full buffer."""


class ZeroSizedOutput(ConversionError):
    """Trimmed frame has no rows or no columns."""


# canonical output phase is GRBG
class BayerPhase(enum.Enum):
    red_green = 0
    green_red = 1
    green_blue = 2
    blue_green = 3

    # component order, using the "RGgB" convention (row 0: first two
    # components, row 1: last two components)
    def get_order(self):
        if self == BayerPhase.red_green:
            return "RGgB"
        elif self == BayerPhase.green_red:
            return "GRBg"
        elif self == BayerPhase.green_blue:
            return "GBRg"
        elif self == BayerPhase.blue_green:
            return "BGgR"

    def get_trim(self):
        if self == BayerPhase.red_green:
            return Trim(top=0, bottom=0, left=1, right=1)
        elif self == BayerPhase.green_red:
            return Trim(top=0, bottom=0, left=0, right=0)
        elif self == BayerPhase.green_blue:
            return Trim(top=1, bottom=1, left=1, right=1)
        elif self == BayerPhase.blue_green:
            return Trim(top=1, bottom=1, left=0, right=0)

    @classmethod
    def get_canonical(cls):
        return cls.green_red


class Trim:
    """Rows/columns removed from each border of the frame."""

    def __init__(self, top, bottom, left, right):
        self.top = top
        self.bottom = bottom
        self.left = left
        self.right = right

    def __eq__(self, other):
        if not isinstance(other, Trim):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __repr__(self):
        return f"Trim(top={self.top}, bottom={self.bottom}, left={self.left}, right={self.right})"

    def to_tuple(self):
        return (self.top, self.bottom, self.left, self.right)

    def get_output_size(self, width, height):
        o_width = width - self.left - self.right
        o_height = height - self.top - self.bottom
        if o_width < 1 or o_height < 1:
            raise ZeroSizedOutput(
                f"trimmed frame is empty: {width}x{height} -> {o_width}x{o_height}"
            )
        return o_width, o_height


class FrameGeometry:
    # GBRG -> GRBG trims up to one row/column on each side, so frames
    # need at least 2 pixels in each dimension
    MIN_SIZE = 2

    def __init__(self, width, height, line_len):
        self.width = width
        self.height = height
        self.line_len = line_len

    def __repr__(self):
        return f"FrameGeometry(width={self.width}, height={self.height}, line_len={self.line_len})"

    @classmethod
    def FromFileSize(cls, file_size, width, height):
        if width < cls.MIN_SIZE or height < cls.MIN_SIZE:
            raise InvalidGeometry(f"bad frame size: {width=}, {height=}")
        if file_size % height != 0:
            raise InvalidGeometry(
                f"the input file size is not multiple of frame height: {file_size=}, {height=}"
            )
        # lines may carry padding bytes at the end
        line_len = file_size // height
        if line_len < width:
            raise LineTooShort(f"line_len ({line_len}) < width ({width})")
        return cls(width, height, line_len)
