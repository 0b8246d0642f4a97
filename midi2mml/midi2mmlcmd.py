#!/usr/bin/python3

# Driver script for midi2mml
#  Copyright (C) 2025  The midi2mml authors

import argparse
import sys
import midi2mml


def error_exit(str_or_excp):
    if isinstance(str_or_excp, Exception):
        print('%s: %s' % (str_or_excp.__class__.__name__, str_or_excp),
              file=sys.stderr)
    else:
        print(str_or_excp, file=sys.stderr)
    sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description=f"""Converts a standard MIDI file into MML text \
(one staff per channel and simultaneous-note lane).
Version {midi2mml.__version__}""",
        usage='%(prog)s [-h] INFILE',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""examples:
  midi2mml a.mid > a.mml
  cat a.mid | midi2mml -""",
    )
    parser.add_argument('infile', metavar='INFILE',
                        help="standard MIDI file ('-' for standard input)")
    args = parser.parse_args(argv)

    try:
        text = midi2mml.convert_file(args.infile)
    except Exception as e:
        error_exit(e)
    sys.stdout.write(text)
    return 0


if __name__ == '__main__':
    sys.exit(main())
