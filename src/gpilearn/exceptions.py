"""
Defines the errors raised by `gpilearn`.

* Configuration errors (`ConfigurationError`, `InvalidEpsilon`) are raised at
construction time and can be recovered from by retrying with valid parameters.
* Domain errors (`DomainError`, `UnknownObservation`) and `TrajectoryError`
signal a broken contract between an environment/agent and the library. They
are never caught inside the library.
"""



class GPILearnError(Exception):
    """Base class of all errors raised by `gpilearn`."""



class ConfigurationError(GPILearnError, ValueError):
    """An estimator or policy parameter is outside its valid range."""



class InvalidEpsilon(ConfigurationError):
    """Exploration rate is not in [0, 1)."""



class DomainError(GPILearnError, KeyError):
    """An element is not a member of its declared discrete domain."""

    def __str__(self):
        # KeyError quotes its argument, which garbles the message.
        return str(self.args[0]) if self.args else ''



class UnknownObservation(DomainError):
    """A policy was asked to act on an observation it does not know."""



class TrajectoryError(GPILearnError, RuntimeError):
    """A terminal trajectory entry reached an update that needs an action."""
