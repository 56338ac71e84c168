class SimpleTotpError(ValueError):
    """
    Base class for every error raised by simpletotp.

    Subclasses ValueError so that callers written against plain
    ``except ValueError`` keep working.
    """


class InvalidArgumentError(SimpleTotpError):
    """
    A required argument is missing, blank or malformed.
    """

    def __init__(self, message: str, argument_name: str) -> None:
        super().__init__(message)
        self.argument_name = argument_name

    @classmethod
    def empty(cls, argument_name: str) -> "InvalidArgumentError":
        return cls("Provided {} is empty".format(argument_name), argument_name)


class OutOfRangeError(SimpleTotpError):
    """
    An instant at or before the Unix epoch, or a counter outside 0..2**64-1.
    """


class InvalidEncodingError(SimpleTotpError):
    """
    Base32 input contains a character outside the alphabet.
    """
