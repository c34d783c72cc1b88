from __future__ import annotations


class CrownyError(ValueError):
    pass


class OutOfRangeError(CrownyError):
    """An id, player, cell or die index outside its valid domain."""


class IllegalActionError(OutOfRangeError):
    """An in-range action that is not legal in the current state."""


class InvalidConfigurationError(CrownyError):
    pass


class InternalInconsistencyError(CrownyError):
    """The enumerator and the applier disagree about the position."""


class EmptyCellError(InternalInconsistencyError):
    pass


class NoSuchDieError(InternalInconsistencyError):
    pass
