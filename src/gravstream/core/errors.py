"""
Exceptions raised by a simulation run.

Every failure here is scoped to ONE run. A hosting process that serves many
runs catches these per run and keeps serving.
"""


class GravstreamError(Exception):
    """Base class for run-level failures."""


class NumericalInstabilityError(GravstreamError):
    """A particle component became NaN or infinite after a step."""

    def __init__(self, tick: int, index: int, component: str, value: float):
        self.tick = tick
        self.index = index
        self.component = component
        self.value = value
        super().__init__(
            f"particle {index} has non-finite {component}={value!r} at tick {tick}"
        )


class SinkClosedError(GravstreamError):
    """The frame sink no longer accepts bytes (broken pipe, closed stream)."""


class EncoderStartError(GravstreamError):
    """The external encoder could not be started or exposes no input pipe."""
