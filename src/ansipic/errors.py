class AnsipicError(Exception):
    """Base class for errors that end a run with a one-line message."""


class UnknownFilter(AnsipicError, ValueError):
    pass


class InvalidSizeFormat(AnsipicError, ValueError):
    pass


class DecodeFailure(AnsipicError):
    pass


class OutputOpenFailure(AnsipicError):
    pass


class OutputWriteFailure(AnsipicError):
    pass
