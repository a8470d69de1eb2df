"""Exception hierarchy for lumi."""


class LumiError(Exception):
    """Base exception for all lumi errors."""


class InvalidTransition(LumiError):
    """A navigation transition was requested from a state that does not allow it."""

    def __init__(self, transition: str, state):
        self.transition = transition
        self.state = state
        super().__init__(f"cannot {transition} from {type(state).__name__}")


class TTSError(LumiError):
    """Error during text-to-speech operation."""
