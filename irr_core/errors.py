"""Exception taxonomy for reliability computations."""


class ReliabilityError(ValueError):
    """Base class for every error raised by a reliability computation."""


class StructuralError(ReliabilityError):
    """The input range has the wrong shape (e.g. not exactly two raters)."""


class ClassificationError(ReliabilityError):
    """A token is neither a code nor a flag in the codebook."""


class ConfigurationError(ReliabilityError):
    """The question or codebook for a sheet can't be determined."""


class ValidationError(ReliabilityError):
    """A cell holds a value the statistic can't accept."""
