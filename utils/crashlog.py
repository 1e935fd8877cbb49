# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback

_fault_file = None


def log_dir() -> str:
    d = os.environ.get("MIDI2ROLL_LOG_DIR") or os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d


def _new_log_path(prefix: str = "crash") -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return os.path.join(log_dir(), f"{prefix}-{stamp}.txt")


def setup_crashlog():
    """Send native faults and uncaught exceptions to logs/*.txt."""
    global _fault_file
    try:
        if _fault_file is None:
            _fault_file = open(_new_log_path("native"), "w", encoding="utf-8")
        faulthandler.enable(_fault_file, all_threads=True)
    except OSError:
        _fault_file = None

    def _hook(exc_type, exc, tb):
        try:
            with open(_new_log_path("crash"), "w", encoding="utf-8") as out:
                out.write("UNCAUGHT EXCEPTION\n")
                out.write("=" * 60 + "\n")
                traceback.print_exception(exc_type, exc, tb, file=out)
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook


def teardown_crashlog():
    global _fault_file
    if _fault_file is not None:
        faulthandler.disable()
        _fault_file.close()
        _fault_file = None
    sys.excepthook = sys.__excepthook__


def log_exception(title: str, exc: BaseException, prefix: str = "error") -> str:
    path = _new_log_path(prefix)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"[{title}] {type(exc).__name__}: {exc}\n")
        out.write("Traceback:\n")
        out.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return path
