"""Hand-off of accumulated environment and outputs to later steps."""
import sys
from typing import Mapping, TextIO

from setup_ruby.environment.accumulator import EnvironmentAccumulator
from setup_ruby.errors import FailureReportedError
from setup_ruby.logging import get_logger
from setup_ruby.workflow import error_command, set_output_command

logger = get_logger(__name__)


class Propagator:
    """Writes the run's persistence protocol lines to the runner."""

    def __init__(self, accumulator: EnvironmentAccumulator, stream: TextIO = None):
        self.accumulator = accumulator
        self.stream = stream or sys.stdout
        self._failed = False

    def propagate(self, outputs: Mapping[str, str]) -> None:
        """Flush the environment, then declare outputs. Last action of a run."""
        if self._failed:
            raise FailureReportedError("Cannot propagate after a failure was reported")

        self.accumulator.flush(self.stream)
        for name, value in outputs.items():
            self.stream.write(set_output_command(name, value) + "\n")
        self.stream.flush()

        logger.info({"event": "outputs_set", "outputs": dict(outputs)})

    def fail(self, message: str) -> None:
        """Report the run's terminal failure; nothing is propagated after it."""
        self._failed = True
        self.stream.write(error_command(message) + "\n")
        self.stream.flush()
