#!/usr/bin/env python3

"""Convert headerless 10-bit packed raw Bayer images to GRBG 8-bit format.

Supported input formats: SRGGB10P (pRAA), SGRBG10P (pgAA), SGBRG10P (pGAA),
and SBGGR10P (pBAA).

Notes:
* the 2 LSBs of each component are dropped (no rounding).
* non-GRBG inputs are made GRBG by dropping the first and last row and/or
  column, so the output may be smaller than the input.
* use `-b` to also write the original Bayer layout as an RGB pnm file
  (<infile>.bayer.pnm).
"""


import argparse
import os
import sys

import raw10p_common
import raw10p_formats
import raw10p_normalize
import raw10p_visualize

__version__ = "0.1"

BAYER_PNM_SUFFIX = ".bayer.pnm"

# "-f ?" lists the supported formats
LIST_FORMATS = "?"

default_values = {
    "debug": 0,
    "i_pix_fmt": raw10p_formats.DEFAULT_PIX_FMT,
    "width": 0,
    "height": 0,
    "bayer_pnm": False,
    "infile": None,
    "outfile": None,
    "logfile": None,
}


def get_bayer_pnm_outfile(infile):
    return f"{infile}{BAYER_PNM_SUFFIX}"


def print_formats(fd):
    print("Supported formats:", file=fd)
    for name in raw10p_formats.list_all():
        print(raw10p_formats.get_short_name(name), file=fd)


def convert_file(infile, outfile, i_pix_fmt, width, height, bayer_pnm, logfd, debug):
    """Convert a 10-bit packed Bayer file into a GRBG 8-bit file.

    Returns:
        dict - status containing the output size ("width", "height") and
            the error of the bayer pnm write ("bayer_pnm_error", None if
            everything went fine)
    """
    status = {"bayer_pnm_error": None}
    phase, name = raw10p_formats.lookup(i_pix_fmt)
    # calculate the line length (padding included)
    file_size = os.stat(infile).st_size
    geometry = raw10p_common.FrameGeometry.FromFileSize(file_size, width, height)
    # reject empty frames before creating any file
    phase.get_trim().get_output_size(geometry.width, geometry.height)
    if debug > 0:
        print(f"debug: {infile=} {name=} {file_size=} {geometry}", file=logfd)

    with open(infile, "rb") as fin:
        # write the pnm file showing the original Bayer layout of the pixels
        if bayer_pnm:
            bayer_outfile = get_bayer_pnm_outfile(infile)
            try:
                with open(bayer_outfile, "wb") as fout:
                    raw10p_visualize.visualize(
                        fin, fout, geometry, phase, logfd, debug
                    )
            except (raw10p_common.ConversionError, OSError) as e:
                status["bayer_pnm_error"] = e
            fin.seek(0, os.SEEK_SET)

        try:
            with open(outfile, "wb") as fout:
                o_width, o_height = raw10p_normalize.convert(
                    fin, fout, geometry, phase, logfd, debug
                )
        except (raw10p_common.ConversionError, OSError) as e:
            # keep the bayer pnm error reportable
            e.bayer_pnm_error = status["bayer_pnm_error"]
            raise
    status["width"] = o_width
    status["height"] = o_height
    return status


def get_options(argv):
    """Generic option parser.

    Args:
        argv: list containing arguments

    Returns:
        Namespace - An argparse.ArgumentParser-generated option object
    """
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        dest="version",
        default=False,
        help="Print version",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="count",
        dest="debug",
        default=default_values["debug"],
        help="Increase verbosity (use multiple times for more)",
    )
    parser.add_argument(
        "--quiet",
        action="store_const",
        dest="debug",
        const=-1,
        help="Zero verbosity",
    )
    parser.add_argument(
        "-f",
        "--format",
        "--i_pix_fmt",
        action="store",
        type=str,
        dest="i_pix_fmt",
        default=default_values["i_pix_fmt"],
        metavar="FORMAT",
        help=(
            "input pixel format: %s, or '%s' for list (default: %s)"
            % (
                ", ".join(raw10p_formats.I_PIX_FMT_LIST),
                LIST_FORMATS,
                default_values["i_pix_fmt"],
            )
        ),
    )
    parser.add_argument(
        "--width",
        action="store",
        type=int,
        dest="width",
        default=default_values["width"],
        metavar="WIDTH",
        help=("use WIDTH width (default: %i)" % default_values["width"]),
    )
    parser.add_argument(
        "--height",
        action="store",
        type=int,
        dest="height",
        default=default_values["height"],
        metavar="HEIGHT",
        help=("HEIGHT height (default: %i)" % default_values["height"]),
    )

    class VideoSizeAction(argparse.Action):
        def __call__(self, parser, namespace, values, option_string=None):
            try:
                namespace.width, namespace.height = [
                    int(v) for v in values[0].split("x")
                ]
            except ValueError:
                parser.error(f"bad size: {values[0]}")

    parser.add_argument(
        "-s",
        "--video-size",
        action=VideoSizeAction,
        nargs=1,
        help="use <width>x<height> (e.g. 640x480)",
    )
    parser.add_argument(
        "-b",
        "--bayer-pnm",
        action="store_true",
        dest="bayer_pnm",
        default=default_values["bayer_pnm"],
        help=f"write the original Bayer data to <infile>{BAYER_PNM_SUFFIX}",
    )
    parser.add_argument(
        "-i",
        "--infile",
        action="store",
        type=str,
        default=default_values["infile"],
        metavar="input-file",
        help="input file",
    )
    parser.add_argument(
        "-o",
        "--outfile",
        action="store",
        type=str,
        default=default_values["outfile"],
        metavar="output-file",
        help="output file",
    )
    parser.add_argument(
        "--logfile",
        action="store",
        dest="logfile",
        type=str,
        default=default_values["logfile"],
        metavar="log-file",
        help="log file",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="file",
        help="<inputfile> <outputfile> (same as -i/-o)",
    )

    # do the parsing
    options = parser.parse_args(argv[1:])
    if options.version:
        return options
    # positional files fill in the missing -i/-o values
    files = list(options.files)
    if options.infile is None and files:
        options.infile = files.pop(0)
    if options.outfile is None and files:
        options.outfile = files.pop(0)
    if files:
        parser.error(f"too many files: {options.files}")
    return options


def main(argv):
    # parse options
    options = get_options(argv)
    if options.version:
        print("version: %s" % __version__)
        return 0
    if options.i_pix_fmt == LIST_FORMATS:
        print_formats(sys.stdout)
        return 0
    # get logfile descriptor
    if options.logfile is None:
        logfd = sys.stdout
    else:
        logfd = open(options.logfile, "w")
    # get infile/outfile
    if options.infile == "-" or options.infile is None:
        options.infile = "/dev/fd/0"
    if options.outfile == "-" or options.outfile is None:
        options.outfile = "/dev/fd/1"
    # print results
    if options.debug > 0:
        print(f"debug: {options}", file=logfd)

    try:
        status = convert_file(
            options.infile,
            options.outfile,
            options.i_pix_fmt,
            options.width,
            options.height,
            options.bayer_pnm,
            logfd,
            options.debug,
        )
        if options.debug > 0:
            print(f"debug: output {status['width']}x{status['height']}", file=logfd)
    except (raw10p_common.ConversionError, OSError) as e:
        bayer_pnm_error = getattr(e, "bayer_pnm_error", None)
        if bayer_pnm_error is not None:
            print(f"error: bayer pnm: {bayer_pnm_error}", file=sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        if logfd is not sys.stdout:
            logfd.close()

    if status["bayer_pnm_error"] is not None:
        print(f"error: bayer pnm: {status['bayer_pnm_error']}", file=sys.stderr)
        return 1
    return 0


def cli():
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    # at least the CLI program name: (CLI) execution
    cli()
