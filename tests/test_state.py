from backend.state import ExpressionBuffer


def test_starts_empty():
    buffer = ExpressionBuffer()
    assert buffer.read() == ""
    assert len(buffer) == 0


def test_append_concatenates():
    buffer = ExpressionBuffer()
    for token in "12+3":
        buffer.append(token)
    assert buffer.read() == "12+3"
    assert len(buffer) == 4


def test_append_does_not_validate():
    buffer = ExpressionBuffer("5")
    buffer.append("++")
    assert buffer.read() == "5++"


def test_clear():
    buffer = ExpressionBuffer("7*6")
    buffer.clear()
    assert buffer.read() == ""


def test_replace():
    buffer = ExpressionBuffer("7*6")
    buffer.replace("42")
    assert buffer.read() == "42"
    assert repr(buffer) == "ExpressionBuffer('42')"
