import random

from lineinput.buffer import LineBuffer


def make(text, cursor):
    buf = LineBuffer(text)
    while buf.cursor > cursor:
        buf.move_left()
    return buf


def test_insert_appends_prepends_and_inserts():
    buf = LineBuffer()
    for c in b"ace":
        buf.insert(c)
    assert buf.text == b"ace" and buf.cursor == 3

    buf.move_home()
    buf.insert(b">")
    assert buf.text == b">ace" and buf.cursor == 1

    buf.move_right()
    buf.insert(b"b")
    assert buf.text == b">abce" and buf.cursor == 3


def test_insert_rejects_more_than_one_byte():
    buf = LineBuffer()
    try:
        buf.insert(b"ab")
    except ValueError:
        pass
    else:
        assert False, "expected ValueError"


def test_movement_bounds():
    buf = make(b"abc", 0)
    assert not buf.move_left()
    assert not buf.move_home()
    assert buf.move_right()
    assert buf.move_end()
    assert buf.cursor == 3
    # The end of the buffer is a valid position, one past it is not
    assert not buf.move_right()
    assert not buf.move_end()
    assert buf.cursor == 3


def test_delete_forward():
    buf = make(b"abc", 1)
    assert buf.delete_forward()
    assert buf.text == b"ac" and buf.cursor == 1

    buf.move_end()
    assert not buf.delete_forward()
    assert buf.text == b"ac"


def test_backspace():
    buf = make(b"abc", 2)
    assert buf.backspace()
    assert buf.text == b"ac" and buf.cursor == 1

    buf.move_home()
    assert not buf.backspace()
    assert buf.text == b"ac" and buf.cursor == 0

    buf.move_end()
    assert buf.backspace()
    assert buf.text == b"a" and buf.cursor == 1


def test_kill_to_end():
    buf = make(b"hello world", 5)
    assert buf.kill_to_end()
    assert buf.text == b"hello" and buf.cursor == 5
    assert not buf.kill_to_end()

    buf = make(b"hello", 0)
    assert buf.kill_to_end()
    assert buf.text == b"" and buf.cursor == 0


def test_clear():
    buf = make(b"hello", 2)
    assert buf.clear()
    assert buf.text == b"" and buf.cursor == 0
    assert not buf.clear()


def test_transpose():
    buf = make(b"abcd", 2)
    assert buf.transpose()
    assert buf.text == b"acbd" and buf.cursor == 2

    # Needs a char on both sides of the cursor
    buf = make(b"abcd", 0)
    assert not buf.transpose()
    assert buf.text == b"abcd"
    buf = make(b"abcd", 4)
    assert not buf.transpose()
    assert buf.text == b"abcd"
    buf = LineBuffer()
    assert not buf.transpose()


def test_delete_word():
    buf = LineBuffer(b"echo hello  ")
    assert buf.delete_word()
    assert buf.text == b"echo " and buf.cursor == 5
    assert buf.delete_word()
    assert buf.text == b"" and buf.cursor == 0
    assert not buf.delete_word()

    buf = make(b"one two three", 7)
    assert buf.delete_word()
    assert buf.text == b"one  three" and buf.cursor == 4


def test_insert_then_backspace_restores_state():
    for text, cursor in [(b"", 0), (b"abc", 0), (b"abc", 1), (b"abc", 3)]:
        buf = make(text, cursor)
        buf.insert(b"x")
        buf.backspace()
        assert buf.text == text
        assert buf.cursor == cursor


def test_cursor_stays_in_range_for_random_edits():
    rng = random.Random(42)
    ops = [
        lambda b: b.insert(rng.choice(b"ab ")),
        LineBuffer.move_left,
        LineBuffer.move_right,
        LineBuffer.move_home,
        LineBuffer.move_end,
        LineBuffer.delete_forward,
        LineBuffer.backspace,
        LineBuffer.kill_to_end,
        LineBuffer.clear,
        LineBuffer.transpose,
        LineBuffer.delete_word,
    ]
    buf = LineBuffer()
    for _ in range(2000):
        rng.choice(ops)(buf)
        assert 0 <= buf.cursor <= len(buf)
