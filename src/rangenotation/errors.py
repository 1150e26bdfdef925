class RangeParseError(ValueError):
    """Raised when range notation cannot be parsed.

    Carries the bare ``message``, the ``input`` that failed, the 0-based
    ``position`` of the problem (0 when unknown) and the underlying
    ``cause``, if any. ``str(error)`` renders the input beneath the message
    and, for a known non-zero position, a caret under the offending
    character.
    """

    def __init__(
        self,
        message: str,
        input: str,
        position: int = 0,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(_render(message, input, position))
        self.message = message
        self.input = input
        self.position = position
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


def _render(message: str, input: str, position: int) -> str:
    lines = [message, f'  Input: "{input}"']
    if 0 < position < len(input):
        # Aligns with the first character after the opening quote.
        lines.append(" " * (10 + position) + "^")
    return "\n".join(lines)
