"""
Error classes for blueprint.
"""


class BlueprintError(Exception):
    """Base error for blueprint operations."""
    pass


class UnknownInstructionError(BlueprintError, LookupError):
    """Catalog lookup failed for an instruction keyword."""
    pass


class UnknownTemplateError(BlueprintError, KeyError):
    """Template id is not part of the template catalog."""

    def __str__(self):
        # KeyError.__str__ would quote the message
        return str(self.args[0]) if self.args else ""


class GraphFormatError(BlueprintError, ValueError):
    """Graph document is missing required fields."""
    pass
