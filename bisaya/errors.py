from dataclasses import dataclass


@dataclass
class ErrorVal:
    """Describes a fatal Bisaya++ error.

    `name` is the error kind (TypeError, ArithmeticError, NameError,
    InputArityError, InputFormatError, InputError or SyntaxError) and
    `message` the human readable detail.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class BisayaError(Exception):
    """Exception type used to abort a Bisaya++ run."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"BisayaError: {err.name}: {err.message}")
        self.err = err

    @property
    def kind(self) -> str:
        return self.err.name
