class SimulationError(Exception):
    """Base class for everything the simulator reports as a failed run."""


class ConfigError(SimulationError, ValueError):
    pass


class TraceFileError(SimulationError):
    def __init__(self, path, reason):
        super().__init__(f"cannot read trace file {path}: {reason}")
        self.path = path
        self.reason = reason


class TraceParseError(SimulationError, ValueError):
    def __init__(self, path, line_number, line, reason):
        super().__init__(f"{path}:{line_number}: {reason}: {line!r}")
        self.path = path
        self.line_number = line_number
        self.line = line
        self.reason = reason


class ProcessIdError(SimulationError, IndexError):
    def __init__(self, process_id, num_processes, position):
        super().__init__(
            f"access {position}: process id {process_id} outside "
            f"0..{num_processes - 1}"
        )
        self.process_id = process_id
        self.num_processes = num_processes
        self.position = position
