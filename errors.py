# errors.py


class MidiRollError(Exception):
    """Base class for fatal conversion errors; main() turns these into exit codes."""


class ConfigError(MidiRollError):
    pass


class MidiReadError(MidiRollError):
    pass


class RenderError(MidiRollError):
    pass
