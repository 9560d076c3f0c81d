"""
Compute what to write to show the line being edited.

The line is drawn on a single terminal row. When it does not fit, only a
window of it is shown, scrolled horizontally so that the cursor stays
visible. Everything here is byte-oriented: one byte is one column.
"""

CLEAR_SCREEN = b"\x1b[H\x1b[2J"
ERASE_TO_END = b"\x1b[K"


def visible_window(prompt_width, length, cursor, columns):
    """Return ``(left, right)``, the slice of the text that fits on screen.

    The window satisfies ``prompt_width + (cursor - left) < columns`` so the
    cursor always has a cell to sit in, and
    ``prompt_width + (right - left) <= columns``.
    """
    space = columns - prompt_width
    if space < 1:
        raise ValueError("The prompt must be narrower than the terminal")
    left = 0
    # Scroll right until the cursor fits
    if cursor - left >= space:
        left = cursor - space + 1
    # Cut off what falls beyond the right edge
    right = min(length, left + space)
    return left, right


def fit_prompt(prompt, columns):
    """Clip a prompt that would leave no room for the cursor."""
    if len(prompt) >= columns:
        return prompt[: max(columns - 1, 0)]
    return prompt


def render_line(prompt, text, cursor, columns):
    """Return the bytes that redraw the line in a single write.

    ``prompt`` and ``text`` are bytes, ``cursor`` an index into ``text``.
    """
    prompt = fit_prompt(prompt, columns)
    left, right = visible_window(len(prompt), len(text), cursor, columns)

    parts = [b"\r", prompt, text[left:right], ERASE_TO_END, b"\r"]
    # A move of zero would be read as a move of one
    offset = len(prompt) + cursor - left
    if offset > 0:
        parts.append(b"\x1b[%dC" % offset)
    return b"".join(parts)


def clear_screen():
    return CLEAR_SCREEN
