"""Errors raised inside the transfer engine."""


class DecodeError(Exception):
    """Payload could not be decoded.

    The message is shown to the user as a validation error, so it names
    the format and, where known, the offending line or record.
    """
