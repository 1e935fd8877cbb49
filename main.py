# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # make config.py importable when run as a script

import argparse
import logging

from config import AppConfig, load_config
from errors import MidiRollError
from utils.crashlog import setup_crashlog, teardown_crashlog, log_exception, log_dir

USAGE = "Usage:\n\nmidi2roll <config file> <midi file>\n"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(verbose: bool = False):
    root = logging.getLogger()
    if root.handlers:
        return

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        encoding="utf-8"
    )
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(os.path.join(log_dir(), "midi2roll.log"),
                                 maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)
    except OSError as e:
        logging.warning("file logging disabled: %s", e)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="midi2roll", description="Convert a MIDI file into SVG pages of a music-box paper strip.")
    ap.add_argument('config', nargs='?', help='JSON configuration file')
    ap.add_argument('midi', nargs='?', help='MIDI file')
    ap.add_argument('--out-dir', default=None, help='where to write the SVG pages (default: next to the MIDI file)')
    ap.add_argument('--preview', action='store_true', help='show the pages in a window after writing them')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.config is None or args.midi is None:
        print(USAGE)
        return 1

    setup_crashlog()
    try:
        return _convert(args)
    except Exception as e:
        # the excepthook is gone by the time this reaches the top level
        try:
            log_exception("uncaught exception", e, prefix="crash")
        except OSError:
            pass
        raise
    finally:
        teardown_crashlog()


def _convert(args) -> int:
    _init_logging(args.verbose)
    from app import App

    try:
        cfg = AppConfig(roll=load_config(args.config), out_dir=args.out_dir, preview=args.preview)
        app = App(cfg)
        written = app.run(args.midi)
    except MidiRollError as e:
        try:
            log_exception("conversion failed", e)
        except OSError as log_err:
            logging.warning("could not write error log: %s", log_err)
        logging.error("%s", e)
        return 2
    uncovered = app.collection.uncovered if app.collection else []
    if uncovered:
        logging.warning("%d notes not covered by the pitch table", len(uncovered))
    logging.info("%d pages written", len(written))
    return 0


if __name__ == '__main__':
    sys.exit(main())
