from errors import UnmatchedCloseDelimiter, UnmatchedOpenDelimiter

LOOP_OPEN = ord("[")
LOOP_CLOSE = ord("]")

NO_TARGET = -1


def preprocess(code: bytes) -> list[int]:
    """Check that every '[' has a matching ']' and build the jump table.

    The result has one slot per byte of `code`. Bracket positions hold the
    position of their partner; every other slot is NO_TARGET.
    """
    targets = [NO_TARGET] * len(code)
    stack = []  # positions of still-unmatched '['

    for pos, byte in enumerate(code):
        if byte == LOOP_OPEN:
            stack.append(pos)
        elif byte == LOOP_CLOSE:
            if not stack:
                raise UnmatchedCloseDelimiter(pos)
            start = stack.pop()
            targets[start] = pos
            targets[pos] = start

    if stack:
        raise UnmatchedOpenDelimiter(stack[-1])

    return targets
