"""
Domain exceptions for Warikan.

Core computations only ever raise InvalidExpenseError; the other errors
belong to construction helpers, the repository and the QR transport.
"""


class WarikanError(Exception):
    """Base exception for Warikan errors."""
    pass


class InvalidExpenseError(WarikanError):
    """Raised when an expense cannot be split (empty split set, bad amount)."""
    pass


class InvalidGroupError(WarikanError):
    """Raised when a group is missing its name or members."""
    pass


class InvalidMemberError(WarikanError):
    """Raised when a member has no usable name."""
    pass


class InvalidQRDataError(WarikanError):
    """Raised when a transport string cannot be decoded into a group."""

    default_detail = "invalid QR data"

    def __init__(self, detail: str = ""):
        super().__init__(f"{self.default_detail}: {detail}" if detail else self.default_detail)


class GroupNotFoundError(WarikanError):
    """Group not found in the repository."""
    pass


class MemberNotFoundError(WarikanError):
    """Member not found in the group."""
    pass
