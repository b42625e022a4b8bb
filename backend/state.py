class ExpressionBuffer:
    """
    The expression the user is composing.

    No validation happens here; whatever is in the buffer is handed to the
    engine as-is when "=" is pressed.
    """

    def __init__(self, text: str = ""):
        self._text = text

    def append(self, token: str):
        self._text += token

    def clear(self):
        self._text = ""

    def replace(self, text: str):
        self._text = text

    def read(self) -> str:
        return self._text

    def __len__(self):
        return len(self._text)

    def __repr__(self):
        return f"ExpressionBuffer({self._text!r})"
