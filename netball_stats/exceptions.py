"""Exceptions raised at the collaborator boundary."""


class InputShapeError(ValueError):
    """Raised when a collaborator passes a non-collection or a malformed record.

    Routine gaps in sports data (unassigned slots, duplicate rows, quarters
    without scores) never raise; only contract violations do.
    """
